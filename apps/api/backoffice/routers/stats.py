"""
Dashboard statistics router.
"""
from fastapi import APIRouter, Depends

from backoffice.core.deps import get_stats_service
from backoffice.schemas.common import Envelope
from backoffice.schemas.stats import DashboardStats
from backoffice.services.stats import StatsService

router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=Envelope[DashboardStats])
def get_dashboard_stats(service: StatsService = Depends(get_stats_service)):
    """Today's sales, order and reservation counts, and menu availability."""
    return Envelope(data=DashboardStats(**service.collect()))
