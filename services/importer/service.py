"""Import run: purge, then contacts, then invoices.

The remap table produced by the contact phase is handed to the invoice phase
explicitly; nothing is shared through module state.
"""

import logging

from services.fakturoid.client import FakturoidClient
from services.importer.contacts import import_contacts
from services.importer.invoices import import_invoices
from services.importer.purge import purge_remote
from services.importer.results import ImportReport
from services.legacy.repository import LegacyDatabase
from services.shared.config import Settings

logger = logging.getLogger(__name__)


class InvoicingImporter:
    """Migrates a legacy invoicing database into a Fakturoid account."""

    def __init__(
        self, client: FakturoidClient, legacy: LegacyDatabase, settings: Settings
    ) -> None:
        """Initialize importer.

        Args:
            client: Client for the target Fakturoid account
            legacy: Source database
            settings: Application settings
        """
        self.client = client
        self.legacy = legacy
        self.settings = settings

    def run(self) -> ImportReport:
        """Run all phases in order.

        Returns:
            ImportReport with per-item results of every phase

        Raises:
            UnknownContactError: Invoice references a contact that was not imported
                (only with orphan_invoice_policy='abort')
            ImportAbortedError: Creating or updating an invoice failed
            FakturoidError: Listing remote invoices or subjects failed
        """
        logger.info(
            f"{self.settings.service_name} {self.settings.service_version}: "
            f"importing into Fakturoid account '{self.client.account}'"
        )

        purged_invoices, purged_subjects = purge_remote(self.client)
        remap, contacts = import_contacts(self.client, self.legacy.iter_contacts())
        invoices = import_invoices(
            self.client,
            self.legacy.iter_invoices(),
            remap,
            orphan_policy=self.settings.orphan_invoice_policy,
        )

        report = ImportReport(
            purge_invoices=purged_invoices,
            purge_subjects=purged_subjects,
            contacts=contacts,
            invoices=invoices,
        )
        for phase in report.phases():
            logger.info(phase.summary())
        return report
