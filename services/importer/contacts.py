"""Import of legacy contacts as Fakturoid subjects."""

import logging
from collections.abc import Iterable

from services.fakturoid.client import FakturoidClient
from services.fakturoid.schema import SubjectCreate
from services.importer.remap import RemapTable
from services.importer.results import ItemResult, PhaseReport
from services.legacy.records import LegacyContact

logger = logging.getLogger(__name__)


def build_subject(contact: LegacyContact) -> SubjectCreate:
    """Map a legacy contact to a subject payload.

    The legacy ID is kept in custom_id so imported subjects can be traced back.
    """
    address = contact.billing_address
    return SubjectCreate(
        name=contact.company_name,
        full_name=contact.contact_name,
        email=contact.email,
        phone=contact.phone,
        bank_account=contact.bank_account,
        registration_no=contact.registration_no,
        vat_no=contact.vat_no,
        street=address.street if address else None,
        city=address.city if address else None,
        zip=address.zip if address else None,
        country=address.country if address else None,
        custom_id=str(contact.contact_id),
    )


def import_contacts(
    client: FakturoidClient, contacts: Iterable[LegacyContact]
) -> tuple[RemapTable, PhaseReport]:
    """Create one subject per legacy contact.

    Contacts the API rejects are logged and left out of the remap table.

    Args:
        client: Fakturoid client
        contacts: Legacy contacts to import

    Returns:
        Tuple of (remap table of imported contacts, phase report)
    """
    remap = RemapTable()
    report = PhaseReport(phase="contacts")

    logger.info("Importing contacts:")
    for contact in contacts:
        label = f"  #{contact.contact_id}: {contact.company_name}"
        result = client.create_subject(build_subject(contact))

        if not result.success or result.remote_id is None:
            logger.warning(f"{label}... Failed! {result.error or 'no ID returned'}")
            report.add(
                ItemResult(
                    item_id=contact.contact_id,
                    success=False,
                    error=result.error or "no ID returned",
                )
            )
            continue

        remap.record(contact.contact_id, result.remote_id)
        logger.info(f"{label}... OK, ID={result.remote_id}")
        report.add(
            ItemResult(item_id=contact.contact_id, success=True, remote_id=result.remote_id)
        )

    return remap, report
