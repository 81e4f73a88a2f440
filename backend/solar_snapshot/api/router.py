"""
Top-level API router that aggregates all sub-routers.
"""

from fastapi import APIRouter

from solar_snapshot.api.solar import router as solar_router

router = APIRouter()
router.include_router(solar_router)
