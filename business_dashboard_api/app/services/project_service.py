"""
Business logic for projects.

Projects are stored in the ``project`` table and reference their
client through the ``client_id`` lookup field.  New projects start in
the ``planning`` status unless another status is given.
"""

from typing import List

from business_dashboard_api.app.core.record_store import DESC, OrderBy
from business_dashboard_api.app.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from business_dashboard_api.app.services.record_service import RecordService


class ProjectService(RecordService):
    """Accessor for project records."""

    table = "project"
    entity = "project"
    fields = ("Name", "status", "budget", "start_date", "end_date", "client_id")
    order_by = (OrderBy("start_date", DESC),)
    field_map = {
        "name": "Name",
        "status": "status",
        "budget": "budget",
        "start_date": "start_date",
        "end_date": "end_date",
        "client_id": "client_id",
    }
    lookup_fields = ("client_id",)
    read_model = ProjectRead

    @classmethod
    async def get_all_projects(cls) -> List[ProjectRead]:
        return [cls.to_read(record) for record in await cls._fetch_all()]

    @classmethod
    async def get_project_by_id(cls, project_id: int) -> ProjectRead:
        return cls.to_read(await cls._fetch_one(project_id))

    @classmethod
    async def create_project(cls, data: ProjectCreate) -> ProjectRead:
        values = data.model_dump(exclude_none=True)
        values["status"] = data.status or "planning"
        return cls.to_read(await cls._create(values))

    @classmethod
    async def update_project(cls, project_id: int, updates: ProjectUpdate) -> ProjectRead:
        return cls.to_read(await cls._update(project_id, updates.model_dump(exclude_none=True)))

    @classmethod
    async def delete_project(cls, project_id: int) -> None:
        await cls._delete(project_id)
