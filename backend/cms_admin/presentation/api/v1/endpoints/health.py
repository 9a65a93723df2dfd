"""Health check endpoint — no remote calls, always available."""

from fastapi import APIRouter, Depends

from cms_admin.application.services import ResourceCatalog
from cms_admin.config import get_settings
from cms_admin.infrastructure.dependencies import get_resource_catalog

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(catalog: ResourceCatalog = Depends(get_resource_catalog)) -> dict:
    """Returns the application status and the size of the loaded catalog."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "resources": len(catalog),
    }
