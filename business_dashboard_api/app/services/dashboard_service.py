"""
Service layer for dashboard statistics.

The dashboard is a point‑in‑time summary of four collections: clients,
projects, tasks (with their timer state) and invoices.  The four
collections are fetched concurrently and, once all have arrived, the
summary is computed by :func:`compute_dashboard`.  If any fetch fails
the whole call fails; there is no partial dashboard.

Nothing is cached: every call fetches and scans the full collections
again, so the cost grows linearly with the number of records.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from business_dashboard_api.app.schemas.client import ClientRead
from business_dashboard_api.app.schemas.dashboard import DashboardData, DashboardSummary, QuickStats
from business_dashboard_api.app.schemas.invoice import InvoiceRead
from business_dashboard_api.app.schemas.project import ProjectRead
from business_dashboard_api.app.schemas.task import TaskRead
from business_dashboard_api.app.services.client_service import ClientService
from business_dashboard_api.app.services.invoice_service import InvoiceService
from business_dashboard_api.app.services.project_service import ProjectService
from business_dashboard_api.app.services.task_service import TaskService


logger = logging.getLogger(__name__)

ACTIVE_PROJECT_STATUS = "active"
PENDING_TASK_STATUSES = ("todo", "in-progress")
DONE_TASK_STATUS = "done"
PAID_INVOICE_STATUS = "paid"
SENT_INVOICE_STATUS = "sent"
MILLISECONDS_PER_HOUR = 1000 * 60 * 60


def parse_due_date(value: Any) -> Optional[datetime]:
    """Parse a stored due date into an aware UTC datetime.

    Accepts ``YYYY-MM-DD`` (midnight UTC) and ISO timestamps, with or
    without an offset or a trailing ``Z``.  Returns ``None`` for missing
    or unparsable values.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _is_overdue(task: TaskRead, now: datetime) -> bool:
    if task.status == DONE_TASK_STATUS:
        return False
    due = parse_due_date(task.due_date)
    return due is not None and due < now


def compute_dashboard(
    clients: Sequence[ClientRead],
    projects: Sequence[ProjectRead],
    tasks: Sequence[TaskRead],
    invoices: Sequence[InvoiceRead],
    now: Optional[datetime] = None,
) -> DashboardData:
    """Compute the dashboard snapshot from already fetched collections.

    Tasks with a missing or unparsable due date are never counted as
    overdue.  Revenue is the sum of paid invoice amounts rounded to the
    nearest whole unit, ties to even (150.5 becomes 150); invoices
    without an amount count as 0.
    """
    current_time = now or datetime.now(timezone.utc)
    if current_time.tzinfo is None:
        current_time = current_time.replace(tzinfo=timezone.utc)

    active_projects = sum(1 for p in projects if p.status == ACTIVE_PROJECT_STATUS)
    pending_tasks = sum(1 for t in tasks if t.status in PENDING_TASK_STATUSES)
    completed_tasks = sum(1 for t in tasks if t.status == DONE_TASK_STATUS)
    revenue = sum(i.amount or 0 for i in invoices if i.status == PAID_INVOICE_STATUS)
    overdue_items = sum(1 for t in tasks if _is_overdue(t, current_time))
    tracked_ms = sum(t.time_tracking.total_time for t in tasks)
    invoices_sent = sum(1 for i in invoices if i.status == SENT_INVOICE_STATUS)

    return DashboardData(
        summary=DashboardSummary(
            total_clients=len(clients),
            active_projects=active_projects,
            pending_tasks=pending_tasks,
            monthly_revenue=round(revenue),
            completed_tasks=completed_tasks,
            overdue_items=overdue_items,
        ),
        quick_stats=QuickStats(
            projects_this_week=active_projects,
            tasks_completed=completed_tasks,
            hours_tracked=tracked_ms / MILLISECONDS_PER_HOUR,
            invoices_sent=invoices_sent,
        ),
    )


class DashboardService:
    """Service providing the dashboard snapshot."""

    @classmethod
    async def get_dashboard_data(cls, now: Optional[datetime] = None) -> DashboardData:
        """Fetch all four collections concurrently and summarise them."""
        clients, projects, tasks, invoices = await asyncio.gather(
            ClientService.get_all_clients(),
            ProjectService.get_all_projects(),
            TaskService.get_all_tasks(),
            InvoiceService.get_all_invoices(),
        )
        logger.debug(
            "Computing dashboard from %d clients, %d projects, %d tasks, %d invoices",
            len(clients),
            len(projects),
            len(tasks),
            len(invoices),
        )
        return compute_dashboard(clients, projects, tasks, invoices, now=now)
