"""
Pydantic models for project data.

Dates are validated on input; on output they are passed through as
stored, because the remote store may hold values this service did not
write.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str = Field(..., examples=["Website redesign"])
    status: str = Field("planning", examples=["active"])
    budget: Optional[float] = Field(None, examples=[12000.0])
    start_date: Optional[date] = Field(None, examples=["2025-03-01"])
    end_date: Optional[date] = Field(None, examples=["2025-06-30"])
    client_id: Optional[int] = Field(None, examples=[1])


class ProjectUpdate(BaseModel):
    """Schema for updating a project.  Unset fields are left unchanged."""

    name: str | None = None
    status: str | None = None
    budget: float | None = None
    start_date: date | None = None
    end_date: date | None = None
    client_id: int | None = None


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: int
    name: Optional[str] = None
    status: Optional[str] = None
    budget: Optional[float] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    client_id: Optional[int] = None

    model_config = {
        "from_attributes": True,
    }
