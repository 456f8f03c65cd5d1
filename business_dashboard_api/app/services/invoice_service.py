"""
Business logic for invoices.

Invoices are stored in the ``app_invoice`` table.  Input is validated
here, before any call to the record store:

* a new invoice needs a project, a positive amount and a due date;
* an update may not set a zero or negative amount;
* marking an invoice as paid needs a payment date.

Violations raise ``RecordValidationError``.
"""

import logging
from datetime import datetime
from typing import List, Optional

from business_dashboard_api.app.core.errors import RecordValidationError
from business_dashboard_api.app.core.record_store import DESC, OrderBy
from business_dashboard_api.app.schemas.invoice import InvoiceCreate, InvoiceRead, InvoiceUpdate
from business_dashboard_api.app.services.record_service import RecordService


logger = logging.getLogger(__name__)


class InvoiceService(RecordService):
    """Accessor for invoice records."""

    table = "app_invoice"
    entity = "invoice"
    fields = ("amount", "status", "due_date", "payment_date", "client_id", "project_id")
    order_by = (OrderBy("due_date", DESC),)
    field_map = {
        "amount": "amount",
        "status": "status",
        "due_date": "due_date",
        "payment_date": "payment_date",
        "client_id": "client_id",
        "project_id": "project_id",
    }
    lookup_fields = ("client_id", "project_id")
    read_model = InvoiceRead

    @classmethod
    async def get_all_invoices(cls) -> List[InvoiceRead]:
        return [cls.to_read(record) for record in await cls._fetch_all()]

    @classmethod
    async def get_invoice_by_id(cls, invoice_id: int) -> InvoiceRead:
        return cls.to_read(await cls._fetch_one(invoice_id))

    @classmethod
    async def create_invoice(cls, data: InvoiceCreate) -> InvoiceRead:
        """Validate and create an invoice.

        ``status`` defaults to ``draft``.  ``payment_date`` is only sent
        when provided.
        """
        if not data.project_id:
            raise RecordValidationError("Project ID is required")
        if data.amount is None or data.amount <= 0:
            raise RecordValidationError("Amount must be greater than 0")
        if not data.due_date:
            raise RecordValidationError("Due date is required")
        values = data.model_dump(exclude_none=True)
        values["amount"] = float(data.amount)
        values["status"] = data.status or "draft"
        return cls.to_read(await cls._create(values))

    @classmethod
    async def update_invoice(cls, invoice_id: int, updates: InvoiceUpdate) -> InvoiceRead:
        """Update the provided fields of an invoice."""
        if updates.amount is not None and updates.amount <= 0:
            raise RecordValidationError("Amount must be greater than 0")
        return cls.to_read(await cls._update(invoice_id, updates.model_dump(exclude_none=True)))

    @classmethod
    async def mark_invoice_as_sent(cls, invoice_id: int) -> InvoiceRead:
        return await cls.update_invoice(invoice_id, InvoiceUpdate(status="sent"))

    @classmethod
    async def mark_invoice_as_paid(
        cls, invoice_id: int, payment_date: Optional[datetime]
    ) -> InvoiceRead:
        if not payment_date:
            raise RecordValidationError("Payment date is required")
        logger.info("Marking invoice %s as paid on %s", invoice_id, payment_date.isoformat())
        return await cls.update_invoice(
            invoice_id, InvoiceUpdate(status="paid", payment_date=payment_date)
        )

    @classmethod
    async def delete_invoice(cls, invoice_id: int) -> None:
        await cls._delete(invoice_id)
