"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from cms_admin.presentation.api.v1.endpoints.health import router as health_router
from cms_admin.presentation.api.v1.endpoints.resources import router as resources_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(resources_router)
