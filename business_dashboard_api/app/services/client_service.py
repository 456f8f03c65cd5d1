"""
Business logic for clients.

Clients are stored in the ``client`` table.  The store field ``Name``
holds the client's display name; ``CreatedOn`` is stamped by the store
and used to list the newest clients first.
"""

from typing import List

from business_dashboard_api.app.core.record_store import DESC, OrderBy
from business_dashboard_api.app.schemas.client import ClientCreate, ClientRead, ClientUpdate
from business_dashboard_api.app.services.record_service import RecordService


class ClientService(RecordService):
    """Accessor for client records."""

    table = "client"
    entity = "client"
    fields = ("Name", "email", "company", "status", "CreatedOn")
    order_by = (OrderBy("CreatedOn", DESC),)
    field_map = {
        "name": "Name",
        "email": "email",
        "company": "company",
        "status": "status",
        "created_on": "CreatedOn",
    }
    read_model = ClientRead

    @classmethod
    async def get_all_clients(cls) -> List[ClientRead]:
        return [cls.to_read(record) for record in await cls._fetch_all()]

    @classmethod
    async def get_client_by_id(cls, client_id: int) -> ClientRead:
        """Return a single client.  Raises ``RecordNotFoundError`` if missing."""
        return cls.to_read(await cls._fetch_one(client_id))

    @classmethod
    async def create_client(cls, data: ClientCreate) -> ClientRead:
        values = data.model_dump(exclude={"status"}, exclude_none=True)
        values["status"] = data.status or "active"
        return cls.to_read(await cls._create(values))

    @classmethod
    async def update_client(cls, client_id: int, updates: ClientUpdate) -> ClientRead:
        return cls.to_read(await cls._update(client_id, updates.model_dump(exclude_none=True)))

    @classmethod
    async def delete_client(cls, client_id: int) -> None:
        await cls._delete(client_id)
