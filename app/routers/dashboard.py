"""
Dashboard statistics router
"""
from fastapi import APIRouter, Depends

from app.schemas.dashboard import DashboardResponse
from app.services.dashboard_service import RECENT_ACTIVITIES, DashboardTicker, dashboard_ticker


router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def get_dashboard_ticker() -> DashboardTicker:
    return dashboard_ticker


@router.get("/stats", response_model=DashboardResponse)
async def dashboard_stats(ticker: DashboardTicker = Depends(get_dashboard_ticker)):
    """Current mock statistics and recent activity feed"""
    return DashboardResponse(stats=ticker.poll(), recent_activities=RECENT_ACTIVITIES)
