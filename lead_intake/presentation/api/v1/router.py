"""Collects the v1 endpoint routers."""

from fastapi import APIRouter

from lead_intake.presentation.api.v1.endpoints.buyers import router as buyers_router
from lead_intake.presentation.api.v1.endpoints.health import router as health_router
from lead_intake.presentation.api.v1.endpoints.users import router as users_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(buyers_router)
router.include_router(users_router)
