"""
Pydantic models for the dashboard snapshot.

The snapshot is immutable and serialised with camelCase keys, e.g.
``{"summary": {"totalClients": 3, ...}, "quickStats": {...}}``.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Snapshot(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class DashboardSummary(_Snapshot):
    total_clients: int
    active_projects: int
    pending_tasks: int
    monthly_revenue: int
    completed_tasks: int
    overdue_items: int


class QuickStats(_Snapshot):
    projects_this_week: int
    tasks_completed: int
    hours_tracked: float
    invoices_sent: int


class DashboardData(_Snapshot):
    summary: DashboardSummary
    quick_stats: QuickStats
