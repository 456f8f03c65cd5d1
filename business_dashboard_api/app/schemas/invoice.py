"""
Pydantic models for invoice data.

Required fields and amount bounds are checked by ``InvoiceService``
so that the same rules apply to API calls and to direct service use.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class InvoiceCreate(BaseModel):
    """Schema for creating an invoice."""

    amount: Optional[float] = Field(None, examples=[1500.0])
    status: str = Field("draft", examples=["draft"])
    due_date: Optional[date] = Field(None, examples=["2025-05-01"])
    payment_date: Optional[datetime] = None
    client_id: Optional[int] = Field(None, examples=[1])
    project_id: Optional[int] = Field(None, examples=[1])


class InvoiceUpdate(BaseModel):
    """Schema for updating an invoice.  Unset fields are left unchanged."""

    amount: float | None = None
    status: str | None = None
    due_date: date | None = None
    payment_date: datetime | None = None
    client_id: int | None = None
    project_id: int | None = None


class InvoicePayment(BaseModel):
    """Body of the "mark as paid" request."""

    payment_date: Optional[datetime] = Field(None, examples=["2025-05-03T10:00:00Z"])


class InvoiceRead(BaseModel):
    """Schema for reading an invoice."""

    id: int
    amount: Optional[float] = None
    status: Optional[str] = None
    due_date: Optional[str] = None
    payment_date: Optional[str] = None
    client_id: Optional[int] = None
    project_id: Optional[int] = None

    model_config = {
        "from_attributes": True,
    }
