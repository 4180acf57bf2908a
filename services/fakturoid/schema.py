"""Fakturoid API v2 request and response models.

Only the fields the import tool sends or reads are modelled. Response models
ignore unknown fields so API additions do not break listing.

API reference: https://fakturoid.docs.apiary.io/
"""

from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PaymentStatus(str, Enum):
    """Payment states an invoice can be moved to."""

    PAID = "pay"


class MessageType(str, Enum):
    """Delivery transitions, mapped to Fakturoid fire events.

    NO_MESSAGE marks the invoice as sent without emailing the client.
    """

    NO_MESSAGE = "mark_as_sent"
    REGULAR = "deliver"
    REMINDER = "deliver_reminder"


class SubjectCreate(BaseModel):
    """Payload for creating a subject (billable contact)."""

    name: str | None = None
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    bank_account: str | None = None
    registration_no: str | None = None
    vat_no: str | None = None
    street: str | None = None
    city: str | None = None
    zip: str | None = None
    country: str | None = None
    custom_id: str | None = Field(None, description="Identifier from the source system")


class InvoiceLineCreate(BaseModel):
    """Single invoice line."""

    name: str
    quantity: Decimal
    unit_name: str | None = None
    unit_price: Decimal
    vat_rate: Decimal


class InvoiceCreate(BaseModel):
    """Payload for creating an invoice."""

    number: str
    subject_id: int
    issued_on: date
    taxable_fulfillment_due: date
    due_on: date
    lines: list[InvoiceLineCreate] = Field(default_factory=list)


class RemoteSubject(BaseModel):
    """Subject as returned by the listing endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str | None = None


class RemoteInvoice(BaseModel):
    """Invoice as returned by the listing endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: int
    number: str | None = None
    client_name: str | None = None
    native_total: Decimal | None = None


class ApiResult(BaseModel):
    """Result of a mutating API call.

    Attributes:
        success: Whether the call succeeded
        remote_id: ID of the created or affected resource
        error: Error message if the call failed
        status_code: HTTP status of a failed call
    """

    success: bool
    remote_id: int | None = None
    error: str | None = None
    status_code: int | None = None
