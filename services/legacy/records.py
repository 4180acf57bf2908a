"""Read-only records of legacy data, detached from the database session."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class LegacyAddress(BaseModel):
    model_config = ConfigDict(frozen=True)

    street: str | None = None
    city: str | None = None
    zip: str | None = None
    country: str | None = None


class LegacyContact(BaseModel):
    """Contact (customer) from the legacy database."""

    model_config = ConfigDict(frozen=True)

    contact_id: int
    company_name: str | None = None
    contact_name: str | None = None
    email: str | None = None
    phone: str | None = None
    bank_account: str | None = None
    registration_no: str | None = Field(None, description="ICO")
    vat_no: str | None = Field(None, description="DIC")
    billing_address: LegacyAddress | None = None


class LegacyInvoiceLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    quantity: Decimal
    unit: str | None = None
    unit_price: Decimal
    tax_rate: Decimal


class LegacyPayment(BaseModel):
    model_config = ConfigDict(frozen=True)

    received_on: date


class LegacyInvoice(BaseModel):
    """Invoice from the legacy database with its lines and payments."""

    model_config = ConfigDict(frozen=True)

    invoice_id: int
    seq_id: int
    contact_id: int
    created_on: date
    taxed_on: date
    due_on: date
    lines: tuple[LegacyInvoiceLine, ...] = ()
    payments: tuple[LegacyPayment, ...] = ()
