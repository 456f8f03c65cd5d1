"""
Project endpoints for API v1.
"""

from typing import List

from fastapi import APIRouter, status

from business_dashboard_api.app.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from business_dashboard_api.app.services.project_service import ProjectService


router = APIRouter()


@router.get("/", response_model=List[ProjectRead])
async def list_projects() -> List[ProjectRead]:
    """List all projects, most recently started first."""
    return await ProjectService.get_all_projects()


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(project_id: int) -> ProjectRead:
    return await ProjectService.get_project_by_id(project_id)


@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(project: ProjectCreate) -> ProjectRead:
    return await ProjectService.create_project(project)


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(project_id: int, updates: ProjectUpdate) -> ProjectRead:
    return await ProjectService.update_project(project_id, updates)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: int) -> None:
    await ProjectService.delete_project(project_id)
