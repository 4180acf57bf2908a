"""Access to the legacy invoicing database.

Each read opens its own session, which stays open while the caller iterates
and is closed once the iteration finishes. One import phase therefore holds
exactly one database connection.
"""

import logging
from collections.abc import Iterator

from sqlalchemy import Engine, create_engine, select
from sqlalchemy.orm import Session, joinedload, selectinload

from services.legacy.models import Contact, Invoice
from services.legacy.records import (
    LegacyAddress,
    LegacyContact,
    LegacyInvoice,
    LegacyInvoiceLine,
    LegacyPayment,
)
from services.shared.config import Settings

logger = logging.getLogger(__name__)


class LegacyDatabase:
    """Read-only gateway to the legacy database."""

    def __init__(self, settings: Settings, engine: Engine | None = None) -> None:
        """Initialize the gateway.

        Args:
            settings: Application settings with legacy_database_url
            engine: Existing engine to use instead of creating one
        """
        self.settings = settings
        self._engine = engine

    @property
    def engine(self) -> Engine:
        """SQLAlchemy engine (created lazily on first use)."""
        if self._engine is None:
            self._engine = create_engine(
                self.settings.legacy_database_url,
                echo=self.settings.legacy_database_echo,
            )
            logger.info(f"Legacy database engine created for {self._engine.url!r}")
        return self._engine

    def iter_contacts(self) -> Iterator[LegacyContact]:
        """Yield all contacts ordered by ID.

        Yields:
            LegacyContact records with their default billing address
        """
        stmt = (
            select(Contact)
            .options(joinedload(Contact.default_bill_address))
            .order_by(Contact.contact_id)
        )
        with Session(self.engine) as session:
            for row in session.scalars(stmt):
                yield _to_contact(row)

    def iter_invoices(self) -> Iterator[LegacyInvoice]:
        """Yield all invoices ordered by ID, with lines and payments loaded.

        Yields:
            LegacyInvoice records
        """
        stmt = (
            select(Invoice)
            .options(selectinload(Invoice.items), selectinload(Invoice.payments))
            .order_by(Invoice.invoice_id)
        )
        with Session(self.engine) as session:
            for row in session.scalars(stmt):
                yield _to_invoice(row)


def _to_contact(row: Contact) -> LegacyContact:
    address = None
    if row.default_bill_address is not None:
        a = row.default_bill_address
        address = LegacyAddress(street=a.street, city=a.city, zip=a.zip, country=a.country)

    return LegacyContact(
        contact_id=row.contact_id,
        company_name=row.company_name,
        contact_name=row.contact_name,
        email=row.contact_email,
        phone=row.contact_mobile,
        bank_account=row.bank_account_number,
        registration_no=row.ico,
        vat_no=row.dic,
        billing_address=address,
    )


def _to_invoice(row: Invoice) -> LegacyInvoice:
    return LegacyInvoice(
        invoice_id=row.invoice_id,
        seq_id=row.seq_id,
        contact_id=row.contact_id,
        created_on=row.date_created,
        taxed_on=row.date_taxed,
        due_on=row.date_due,
        lines=tuple(
            LegacyInvoiceLine(
                name=item.name,
                quantity=item.quantity,
                unit=item.unit,
                unit_price=item.unit_price,
                tax_rate=item.tax,
            )
            for item in row.items
        ),
        payments=tuple(LegacyPayment(received_on=p.date_received) for p in row.payments),
    )
