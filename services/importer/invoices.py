"""Import of legacy invoices with their payment and delivery status."""

import logging
from collections.abc import Iterable
from datetime import date
from typing import Literal

from services.fakturoid.client import FakturoidClient
from services.fakturoid.schema import (
    ApiResult,
    InvoiceCreate,
    InvoiceLineCreate,
    MessageType,
    PaymentStatus,
)
from services.importer.numbering import format_invoice_number
from services.importer.remap import RemapTable, UnknownContactError
from services.importer.results import ItemResult, PhaseReport
from services.legacy.records import LegacyInvoice

logger = logging.getLogger(__name__)


class ImportAbortedError(RuntimeError):
    """Raised when an invoice cannot be created or updated; stops the run."""

    def __init__(self, invoice_id: int, action: str, reason: str | None) -> None:
        super().__init__(f"Invoice #{invoice_id}: {action} failed: {reason}")
        self.invoice_id = invoice_id
        self.action = action
        self.reason = reason


def build_invoice(invoice: LegacyInvoice, subject_id: int) -> InvoiceCreate:
    """Map a legacy invoice to an invoice payload.

    Lines are copied one-to-one in their original order.
    """
    return InvoiceCreate(
        number=format_invoice_number(invoice.taxed_on.year, invoice.seq_id),
        subject_id=subject_id,
        issued_on=invoice.created_on,
        taxable_fulfillment_due=invoice.taxed_on,
        due_on=invoice.due_on,
        lines=[
            InvoiceLineCreate(
                name=line.name,
                quantity=line.quantity,
                unit_name=line.unit,
                unit_price=line.unit_price,
                vat_rate=line.tax_rate,
            )
            for line in invoice.lines
        ],
    )


def latest_payment_date(invoice: LegacyInvoice) -> date | None:
    """Return the date of the last payment, or None if the invoice is unpaid."""
    if not invoice.payments:
        return None
    return max(p.received_on for p in invoice.payments)


def update_status(client: FakturoidClient, invoice: LegacyInvoice, remote_id: int) -> ApiResult:
    """Mark a created invoice as paid, or as sent when it has no payments.

    Exactly one of the two calls is made.
    """
    paid_on = latest_payment_date(invoice)
    if paid_on is not None:
        logger.info(f"  #{invoice.invoice_id}: Updating payment status ({paid_on})...")
        return client.set_payment_status(remote_id, PaymentStatus.PAID, paid_on)

    logger.info(f"  #{invoice.invoice_id}: Updating delivery status...")
    return client.send_message(remote_id, MessageType.NO_MESSAGE)


def import_invoices(
    client: FakturoidClient,
    invoices: Iterable[LegacyInvoice],
    remap: RemapTable,
    orphan_policy: Literal["abort", "skip"] = "abort",
) -> PhaseReport:
    """Create one Fakturoid invoice per legacy invoice.

    Args:
        client: Fakturoid client
        invoices: Legacy invoices to import
        remap: Contacts imported in the contact phase
        orphan_policy: 'abort' raises on an invoice whose contact is not in
            the remap table, 'skip' records it as failed and continues

    Returns:
        PhaseReport with one result per invoice

    Raises:
        UnknownContactError: Invoice contact not imported (orphan_policy='abort')
        ImportAbortedError: If creating or updating an invoice fails
    """
    report = PhaseReport(phase="invoices")

    logger.info("Importing invoices:")
    for invoice in invoices:
        try:
            subject_id = remap.lookup(invoice.contact_id)
        except UnknownContactError as e:
            if orphan_policy == "abort":
                logger.error(f"  #{invoice.invoice_id}: {e}")
                raise
            logger.warning(f"  #{invoice.invoice_id}: Skipped, {e}")
            report.add(ItemResult(item_id=invoice.invoice_id, success=False, error=str(e)))
            continue

        payload = build_invoice(invoice, subject_id)
        label = f"  #{invoice.invoice_id}: {payload.number}"

        created = client.create_invoice(payload)
        if not created.success or created.remote_id is None:
            logger.error(f"{label}... Failed! {created.error}")
            raise ImportAbortedError(invoice.invoice_id, "create", created.error)
        logger.info(f"{label}... OK, ID={created.remote_id}")

        updated = update_status(client, invoice, created.remote_id)
        if not updated.success:
            logger.error(f"  #{invoice.invoice_id}: Status update failed! {updated.error}")
            raise ImportAbortedError(invoice.invoice_id, "status update", updated.error)
        logger.info(f"  #{invoice.invoice_id}: OK")

        report.add(
            ItemResult(item_id=invoice.invoice_id, success=True, remote_id=created.remote_id)
        )

    return report
