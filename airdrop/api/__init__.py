"""API routes aggregation"""

from fastapi import APIRouter

from .health import router as health_router
from .registration.router import router as registration_router
from .referrals.router import router as referrals_router

# Create API router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(registration_router, tags=["Registration"])
api_router.include_router(referrals_router, tags=["Referrals"])

# Export router
router = api_router
