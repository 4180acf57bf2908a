"""Removal of all existing invoices and subjects from the Fakturoid account.

Invoices go first because they reference subjects. Failed deletions are
reported and skipped; there is no rollback.
"""

import logging

from services.fakturoid.client import FakturoidClient
from services.importer.results import ItemResult, PhaseReport

logger = logging.getLogger(__name__)


def purge_invoices(client: FakturoidClient) -> PhaseReport:
    """Delete every invoice in the account.

    Args:
        client: Fakturoid client

    Returns:
        PhaseReport with one result per listed invoice

    Raises:
        FakturoidError: If the invoice list cannot be fetched
    """
    report = PhaseReport(phase="purge_invoices")

    logger.info("Listing all invoices...")
    invoices = client.list_invoices()
    logger.info(f"Deleting {len(invoices)} invoices:")

    for invoice in invoices:
        total = "-" if invoice.native_total is None else f"{invoice.native_total:,.2f}"
        label = f"  #{invoice.id}: ({invoice.number}) {invoice.client_name}, {total}"
        result = client.delete_invoice(invoice.id)
        if result.success:
            logger.info(f"{label}... OK")
        else:
            logger.warning(f"{label}... {result.error}")
        report.add(ItemResult(item_id=invoice.id, success=result.success, error=result.error))

    return report


def purge_subjects(client: FakturoidClient) -> PhaseReport:
    """Delete every subject in the account.

    Args:
        client: Fakturoid client

    Returns:
        PhaseReport with one result per listed subject

    Raises:
        FakturoidError: If the subject list cannot be fetched
    """
    report = PhaseReport(phase="purge_subjects")

    logger.info("Listing all subjects...")
    subjects = client.list_subjects()
    logger.info(f"Deleting {len(subjects)} subjects:")

    for subject in subjects:
        result = client.delete_subject(subject.id)
        if result.success:
            logger.info(f"  #{subject.id}: {subject.name}... OK")
        else:
            logger.warning(f"  #{subject.id}: {subject.name}... {result.error}")
        report.add(ItemResult(item_id=subject.id, success=result.success, error=result.error))

    return report


def purge_remote(client: FakturoidClient) -> tuple[PhaseReport, PhaseReport]:
    """Empty the account: all invoices, then all subjects.

    Returns:
        Tuple of (invoice purge report, subject purge report)
    """
    invoices = purge_invoices(client)
    subjects = purge_subjects(client)
    return invoices, subjects
