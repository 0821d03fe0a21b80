"""
FastAPI dependencies giving routes access to the components built by
``create_app()`` and stored on ``app.state``.
"""

from typing import Optional

from fastapi import Request

from marketing_site.core.catalog import ServiceCatalog
from marketing_site.core.config import Settings
from marketing_site.core.errors import RateLimitExceeded
from marketing_site.core.rate_limit import CONTACT_SCOPE, RequestRateLimiter
from marketing_site.core.submissions import ContactService


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_contact_service(request: Request) -> ContactService:
    return request.app.state.contact_service


def get_service_catalog(request: Request) -> ServiceCatalog:
    return request.app.state.service_catalog


def get_rate_limiter(request: Request) -> Optional[RequestRateLimiter]:
    return request.app.state.rate_limiter


def enforce_contact_rate_limit(request: Request):
    """Count a contact submission against the caller's hourly quota."""
    limiter = get_rate_limiter(request)
    if limiter is None:
        return

    result = limiter.hit(CONTACT_SCOPE, client_address(request))
    if not result.allowed:
        raise RateLimitExceeded(
            "Too many contact form submissions. Please try again later.",
            code="CONTACT_LIMIT_EXCEEDED",
            headers={"Retry-After": str(result.retry_after)},
        )
