"""
Top‑level router for version 1 of the API.

When new entities are introduced, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import clients, dashboard, invoices, projects, tasks

router = APIRouter()

router.include_router(clients.router, prefix="/clients", tags=["clients"])
router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
