"""
Top-level API router that aggregates all sub-routers.
"""

from fastapi import APIRouter

from solarquote.api.estimate import router as estimate_router
from solarquote.api.leads import router as leads_router
from solarquote.api.reference import router as reference_router

router = APIRouter()
router.include_router(estimate_router)
router.include_router(leads_router)
router.include_router(reference_router)
