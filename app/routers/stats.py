# =============================================================================
# app/routers/stats.py - Dashboard Stats
# =============================================================================

from fastapi import APIRouter

from app.dependencies import CatalogDep
from app.exceptions import unwrap
from app.schemas import Envelope
from core.models.response import DirectoryStats

router = APIRouter()


@router.get("/stats", response_model=Envelope[DirectoryStats])
async def get_stats(catalog: CatalogDep):
    """
    Tool and category totals for the admin dashboard.

    If either count fails, the request fails; partial numbers are never
    returned.
    """
    return Envelope(data=unwrap(await catalog.get_stats()))
