from fastapi import APIRouter
from marketing_site.api.endpoints import contact, services, site

api_router = APIRouter()

api_router.include_router(site.router, tags=["Site"])
api_router.include_router(contact.router, tags=["Contact"])
api_router.include_router(services.router, prefix="/api", tags=["Services"])
