"""SQLAlchemy mapping of the legacy invoicing database.

Table and column names follow the legacy schema exactly; attribute names are
Python style. The tool only reads these tables.

Based on SQLAlchemy 2.0 declarative mapping:
https://docs.sqlalchemy.org/en/20/orm/declarative_tables.html
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Declarative base for legacy tables."""


class Address(Base):
    __tablename__ = "Addresses"

    address_id: Mapped[int] = mapped_column("AddressId", Integer, primary_key=True)
    street: Mapped[str | None] = mapped_column("Street", String(200))
    city: Mapped[str | None] = mapped_column("City", String(100))
    zip: Mapped[str | None] = mapped_column("ZIP", String(20))
    country: Mapped[str | None] = mapped_column("Country", String(50))


class Contact(Base):
    __tablename__ = "Contacts"

    contact_id: Mapped[int] = mapped_column("ContactId", Integer, primary_key=True)
    company_name: Mapped[str | None] = mapped_column("CompanyName", String(200))
    contact_name: Mapped[str | None] = mapped_column("ContactName", String(200))
    contact_email: Mapped[str | None] = mapped_column("ContactEmail", String(200))
    contact_mobile: Mapped[str | None] = mapped_column("ContactMobile", String(50))
    bank_account_number: Mapped[str | None] = mapped_column("BankAccountNumber", String(50))
    ico: Mapped[str | None] = mapped_column("ICO", String(20))
    dic: Mapped[str | None] = mapped_column("DIC", String(20))
    default_bill_address_id: Mapped[int | None] = mapped_column(
        "DefaultBillAddressId", ForeignKey("Addresses.AddressId")
    )

    default_bill_address: Mapped[Address | None] = relationship()


class Invoice(Base):
    __tablename__ = "Invoices"

    invoice_id: Mapped[int] = mapped_column("InvoiceId", Integer, primary_key=True)
    seq_id: Mapped[int] = mapped_column("SeqId", Integer)
    contact_id: Mapped[int] = mapped_column("ContactId", ForeignKey("Contacts.ContactId"))
    date_created: Mapped[date] = mapped_column("DateCreated", Date)
    date_taxed: Mapped[date] = mapped_column("DateTaxed", Date)
    date_due: Mapped[date] = mapped_column("DateDue", Date)

    items: Mapped[list["InvoiceItem"]] = relationship(order_by="InvoiceItem.item_id")
    payments: Mapped[list["Payment"]] = relationship(order_by="Payment.payment_id")


class InvoiceItem(Base):
    __tablename__ = "InvoiceItems"

    item_id: Mapped[int] = mapped_column("ItemId", Integer, primary_key=True)
    invoice_id: Mapped[int] = mapped_column("InvoiceId", ForeignKey("Invoices.InvoiceId"))
    name: Mapped[str] = mapped_column("Name", String(500))
    quantity: Mapped[Decimal] = mapped_column("Quantity", Numeric(18, 4))
    unit: Mapped[str | None] = mapped_column("Unit", String(20))
    unit_price: Mapped[Decimal] = mapped_column("UnitPrice", Numeric(18, 4))
    tax: Mapped[Decimal] = mapped_column("Tax", Numeric(5, 2))


class Payment(Base):
    __tablename__ = "Payments"

    payment_id: Mapped[int] = mapped_column("PaymentId", Integer, primary_key=True)
    invoice_id: Mapped[int] = mapped_column("InvoiceId", ForeignKey("Invoices.InvoiceId"))
    date_received: Mapped[date] = mapped_column("DateReceived", Date)
