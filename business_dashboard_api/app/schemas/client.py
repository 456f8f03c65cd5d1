"""
Pydantic models for client data.

``ClientCreate`` is accepted when adding a client, ``ClientUpdate``
for partial updates and ``ClientRead`` is returned to callers.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ClientCreate(BaseModel):
    """Schema for creating a client."""

    name: str = Field(..., examples=["Jane Cooper"])
    email: Optional[str] = Field(None, examples=["jane@acme.test"])
    company: Optional[str] = Field(None, examples=["Acme Ltd"])
    status: str = Field("active", examples=["active"])


class ClientUpdate(BaseModel):
    """Schema for updating a client.

    All fields are optional; only provided fields are sent to the store.
    """
    name: str | None = None
    email: str | None = None
    company: str | None = None
    status: str | None = None


class ClientRead(BaseModel):
    """Schema for reading a client."""

    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    status: Optional[str] = None
    created_on: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }
