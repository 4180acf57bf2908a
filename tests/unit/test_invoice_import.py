"""Unit tests for invoice import."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from services.fakturoid.client import FakturoidClient
from services.fakturoid.schema import ApiResult, MessageType, PaymentStatus
from services.importer.invoices import (
    ImportAbortedError,
    build_invoice,
    import_invoices,
    latest_payment_date,
)
from services.importer.remap import RemapTable, UnknownContactError
from services.legacy.records import LegacyInvoice, LegacyInvoiceLine, LegacyPayment


def make_invoice(
    invoice_id: int = 9, contact_id: int = 42, payments: tuple[date, ...] = ()
) -> LegacyInvoice:
    return LegacyInvoice(
        invoice_id=invoice_id,
        seq_id=7,
        contact_id=contact_id,
        created_on=date(2021, 2, 28),
        taxed_on=date(2021, 3, 1),
        due_on=date(2021, 3, 15),
        lines=(
            LegacyInvoiceLine(
                name="Widget", quantity=Decimal("2"), unit="ks",
                unit_price=Decimal("10.0"), tax_rate=Decimal("21"),
            ),
            LegacyInvoiceLine(
                name="Support", quantity=Decimal("1.5"), unit="h",
                unit_price=Decimal("800"), tax_rate=Decimal("0"),
            ),
        ),
        payments=tuple(LegacyPayment(received_on=d) for d in payments),
    )


@pytest.fixture
def remap() -> RemapTable:
    table = RemapTable()
    table.record(42, 1001)
    return table


@pytest.fixture
def client() -> MagicMock:
    mock = MagicMock(spec=FakturoidClient)
    mock.create_invoice.return_value = ApiResult(success=True, remote_id=5000)
    mock.set_payment_status.return_value = ApiResult(success=True, remote_id=5000)
    mock.send_message.return_value = ApiResult(success=True, remote_id=5000)
    return mock


class TestBuildInvoice:
    def test_fields_and_lines(self) -> None:
        payload = build_invoice(make_invoice(), subject_id=1001)

        assert payload.number == "410100007"
        assert payload.subject_id == 1001
        assert payload.issued_on == date(2021, 2, 28)
        assert payload.taxable_fulfillment_due == date(2021, 3, 1)
        assert payload.due_on == date(2021, 3, 15)
        assert [line.name for line in payload.lines] == ["Widget", "Support"]
        first = payload.lines[0]
        assert first.quantity == Decimal("2")
        assert first.unit_name == "ks"
        assert first.unit_price == Decimal("10.0")
        assert first.vat_rate == Decimal("21")

    def test_number_uses_taxed_year_not_issue_year(self) -> None:
        invoice = make_invoice().model_copy(
            update={"created_on": date(2020, 12, 31), "taxed_on": date(2021, 1, 2)}
        )

        assert build_invoice(invoice, subject_id=1).number == "410100007"


class TestLatestPaymentDate:
    def test_no_payments(self) -> None:
        assert latest_payment_date(make_invoice()) is None

    def test_max_of_payments(self) -> None:
        invoice = make_invoice(payments=(date(2021, 3, 20), date(2021, 4, 2), date(2021, 3, 25)))
        assert latest_payment_date(invoice) == date(2021, 4, 2)


class TestImportInvoices:
    def test_unpaid_invoice_marked_as_sent(self, client: MagicMock, remap: RemapTable) -> None:
        report = import_invoices(client, [make_invoice()], remap)

        client.send_message.assert_called_once_with(5000, MessageType.NO_MESSAGE)
        client.set_payment_status.assert_not_called()
        assert report.succeeded == 1
        assert report.results[0].remote_id == 5000

    def test_paid_invoice_marked_paid_on_last_payment(
        self, client: MagicMock, remap: RemapTable
    ) -> None:
        invoice = make_invoice(payments=(date(2021, 3, 20), date(2021, 4, 2)))

        import_invoices(client, [invoice], remap)

        client.set_payment_status.assert_called_once_with(
            5000, PaymentStatus.PAID, date(2021, 4, 2)
        )
        client.send_message.assert_not_called()

    def test_subject_resolved_through_remap(self, client: MagicMock, remap: RemapTable) -> None:
        import_invoices(client, [make_invoice()], remap)

        payload = client.create_invoice.call_args.args[0]
        assert payload.subject_id == 1001

    def test_unknown_contact_aborts_by_default(
        self, client: MagicMock, remap: RemapTable
    ) -> None:
        with pytest.raises(UnknownContactError):
            import_invoices(client, [make_invoice(contact_id=99)], remap)

        client.create_invoice.assert_not_called()

    def test_unknown_contact_skipped_with_skip_policy(
        self, client: MagicMock, remap: RemapTable
    ) -> None:
        invoices = [make_invoice(invoice_id=1, contact_id=99), make_invoice(invoice_id=2)]

        report = import_invoices(client, invoices, remap, orphan_policy="skip")

        assert client.create_invoice.call_count == 1
        assert report.failed == 1
        assert report.succeeded == 1
        assert report.results[0].item_id == 1
        assert "#99" in str(report.results[0].error)

    def test_create_failure_aborts_run(self, client: MagicMock, remap: RemapTable) -> None:
        client.create_invoice.return_value = ApiResult(
            success=False, error="number: has already been taken", status_code=422
        )

        with pytest.raises(ImportAbortedError) as exc_info:
            import_invoices(client, [make_invoice(), make_invoice(invoice_id=10)], remap)

        assert exc_info.value.invoice_id == 9
        assert exc_info.value.action == "create"
        assert client.create_invoice.call_count == 1
        client.send_message.assert_not_called()

    def test_status_failure_aborts_run(self, client: MagicMock, remap: RemapTable) -> None:
        client.send_message.return_value = ApiResult(success=False, error="HTTP 500")

        with pytest.raises(ImportAbortedError) as exc_info:
            import_invoices(client, [make_invoice()], remap)

        assert exc_info.value.action == "status update"
