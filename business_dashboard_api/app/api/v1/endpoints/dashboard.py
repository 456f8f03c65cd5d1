"""
Dashboard endpoint for API v1.

Returns the summary counts and quick statistics computed from the
current clients, projects, tasks and invoices.  The response uses
camelCase keys, e.g. ``summary.totalClients``.
"""

from fastapi import APIRouter

from business_dashboard_api.app.schemas.dashboard import DashboardData
from business_dashboard_api.app.services.dashboard_service import DashboardService


router = APIRouter()


@router.get("", response_model=DashboardData)
async def get_dashboard() -> DashboardData:
    """Compute the dashboard from a fresh read of all four collections."""
    return await DashboardService.get_dashboard_data()
