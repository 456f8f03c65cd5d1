"""
Invoice endpoints for API v1.

Invalid input (missing project or due date, non‑positive amount,
missing payment date) is rejected with ``422`` before the record store
is contacted.
"""

from typing import List

from fastapi import APIRouter, status

from business_dashboard_api.app.schemas.invoice import (
    InvoiceCreate,
    InvoicePayment,
    InvoiceRead,
    InvoiceUpdate,
)
from business_dashboard_api.app.services.invoice_service import InvoiceService


router = APIRouter()


@router.get("/", response_model=List[InvoiceRead])
async def list_invoices() -> List[InvoiceRead]:
    return await InvoiceService.get_all_invoices()


@router.get("/{invoice_id}", response_model=InvoiceRead)
async def get_invoice(invoice_id: int) -> InvoiceRead:
    return await InvoiceService.get_invoice_by_id(invoice_id)


@router.post("/", response_model=InvoiceRead, status_code=status.HTTP_201_CREATED)
async def create_invoice(invoice: InvoiceCreate) -> InvoiceRead:
    return await InvoiceService.create_invoice(invoice)


@router.put("/{invoice_id}", response_model=InvoiceRead)
async def update_invoice(invoice_id: int, updates: InvoiceUpdate) -> InvoiceRead:
    return await InvoiceService.update_invoice(invoice_id, updates)


@router.post("/{invoice_id}/send", response_model=InvoiceRead)
async def mark_invoice_as_sent(invoice_id: int) -> InvoiceRead:
    return await InvoiceService.mark_invoice_as_sent(invoice_id)


@router.post("/{invoice_id}/pay", response_model=InvoiceRead)
async def mark_invoice_as_paid(invoice_id: int, payment: InvoicePayment) -> InvoiceRead:
    """Mark an invoice as paid on the given payment date."""
    return await InvoiceService.mark_invoice_as_paid(invoice_id, payment.payment_date)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(invoice_id: int) -> None:
    await InvoiceService.delete_invoice(invoice_id)
