"""
Static catalog of the service offerings shown on the landing page.

The catalog is built once by ``create_app()`` and kept on ``app.state``;
it is read-only for the lifetime of the process.
"""

import logging
from typing import Iterable, List, Optional

from marketing_site.models.service import ServiceOffering

logger = logging.getLogger(__name__)


DEFAULT_SERVICES = [
    ServiceOffering(
        id="website",
        name="AI-Powered Websites",
        description="Professional websites that convert visitors into customers",
        startingPrice=25000,
        features=[
            "Mobile-first responsive design",
            "SEO optimization included",
            "Conversion tracking setup",
            "Performance monitoring",
        ],
    ),
    ServiceOffering(
        id="chatbot",
        name="Smart AI Chatbots",
        description="24/7 customer service that captures leads automatically",
        startingPrice=15000,
        features=[
            "Custom conversation flows",
            "Lead qualification system",
            "Multi-platform integration",
            "Analytics & insights",
        ],
    ),
    ServiceOffering(
        id="marketing",
        name="Marketing Assets",
        description="Professional graphics and branded content",
        startingPrice=8000,
        features=[
            "Brand identity design",
            "Social media templates",
            "Marketing materials",
            "Brand guidelines",
        ],
    ),
    ServiceOffering(
        id="automation",
        name="AI Workflow Automation",
        description="Custom automation systems for business processes",
        startingPrice=12000,
        features=[
            "Process automation",
            "Tool integrations",
            "Data synchronization",
            "Custom workflows",
        ],
    ),
]


class ServiceCatalog:
    def __init__(self, services: Optional[Iterable[ServiceOffering]] = None):
        self._services = list(DEFAULT_SERVICES if services is None else services)
        logger.info(f"Service catalog loaded with {len(self._services)} offerings")

    def list_services(self) -> List[ServiceOffering]:
        return list(self._services)
