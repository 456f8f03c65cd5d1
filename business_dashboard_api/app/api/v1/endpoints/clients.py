"""
Client endpoints for API v1.

CRUD operations over the ``client`` table.  Errors raised by the
service are translated to HTTP responses by the handlers registered in
``app.main``.
"""

from typing import List

from fastapi import APIRouter, status

from business_dashboard_api.app.schemas.client import ClientCreate, ClientRead, ClientUpdate
from business_dashboard_api.app.services.client_service import ClientService


router = APIRouter()


@router.get("/", response_model=List[ClientRead])
async def list_clients() -> List[ClientRead]:
    """List all clients, newest first."""
    return await ClientService.get_all_clients()


@router.get("/{client_id}", response_model=ClientRead)
async def get_client(client_id: int) -> ClientRead:
    return await ClientService.get_client_by_id(client_id)


@router.post("/", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
async def create_client(client: ClientCreate) -> ClientRead:
    return await ClientService.create_client(client)


@router.put("/{client_id}", response_model=ClientRead)
async def update_client(client_id: int, updates: ClientUpdate) -> ClientRead:
    """Update a client.  Only the provided fields are changed."""
    return await ClientService.update_client(client_id, updates)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(client_id: int) -> None:
    await ClientService.delete_client(client_id)
