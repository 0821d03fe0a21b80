from fastapi import APIRouter, Depends
from typing import Any, Dict

from marketing_site.api.deps import get_service_catalog
from marketing_site.core.catalog import ServiceCatalog

router = APIRouter()


@router.get("/services")
async def list_services(catalog: ServiceCatalog = Depends(get_service_catalog)) -> Dict[str, Any]:
    """Service offerings with their starting prices."""
    return {
        "success": True,
        "data": [service.model_dump() for service in catalog.list_services()],
    }
