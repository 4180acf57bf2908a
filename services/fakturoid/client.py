"""Fakturoid API v2 client.

Thin synchronous wrapper over httpx with:
- HTTP Basic authentication (account email + API token)
- Transparent pagination for listing endpoints
- Retry with backoff for transport errors on GET and DELETE requests
- Result objects for mutating calls, so callers decide whether a failed
  item is fatal

API reference: https://fakturoid.docs.apiary.io/
"""

import logging
from datetime import date
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from services.fakturoid.schema import (
    ApiResult,
    InvoiceCreate,
    MessageType,
    PaymentStatus,
    RemoteInvoice,
    RemoteSubject,
    SubjectCreate,
)
from services.shared.config import Settings

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

IDEMPOTENT_METHODS = frozenset({"GET", "DELETE"})


class FakturoidError(Exception):
    """Error response (HTTP 4xx/5xx) returned by the Fakturoid API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @classmethod
    def from_response(cls, response: httpx.Response) -> "FakturoidError":
        """Build an error from a failed response.

        Fakturoid reports validation problems as
        ``{"errors": {"field": ["reason", ...]}}``.

        Args:
            response: Failed HTTP response

        Returns:
            FakturoidError with a human readable message
        """
        message = f"HTTP {response.status_code} {response.reason_phrase}".strip()
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            errors = body.get("errors")
            if isinstance(errors, dict) and errors:
                parts = []
                for field, reasons in errors.items():
                    if isinstance(reasons, list):
                        reasons = ", ".join(str(r) for r in reasons)
                    parts.append(f"{field}: {reasons}")
                message = "; ".join(parts)
            elif isinstance(body.get("error"), str):
                message = body["error"]

        return cls(message, status_code=response.status_code)


class FakturoidClient:
    """Client for a single Fakturoid account.

    Usable as a context manager; the underlying connection pool is closed on exit.
    """

    def __init__(
        self,
        account: str,
        email: str,
        token: str,
        settings: Settings,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            account: Account slug (the part of the Fakturoid URL after /accounts/)
            email: Login email of the API user
            token: API token of the API user
            settings: Application settings
            transport: Optional httpx transport (used by tests)
        """
        self.account = account
        self._client = httpx.Client(
            base_url=f"{settings.fakturoid_base_url.rstrip('/')}/accounts/{account}/",
            auth=(email, token),
            headers={
                "User-Agent": f"{settings.fakturoid_user_agent} ({email})",
                "Accept": "application/json",
            },
            timeout=settings.http_timeout,
            transport=transport,
        )
        self._retrying = Retrying(
            retry=retry_if_exception_type(httpx.TransportError),
            wait=wait_exponential_jitter(initial=1, max=30),
            stop=stop_after_attempt(settings.http_retry_attempts),
            reraise=True,
        )

    def __enter__(self) -> "FakturoidClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()

    # Low level

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request, retrying transport errors for idempotent methods.

        POST requests are sent once: after a timeout the server may already
        have created the resource.

        Args:
            method: HTTP method
            path: Path relative to the account root (e.g. 'invoices.json')
            **kwargs: Passed to httpx.Client.request

        Returns:
            Successful response

        Raises:
            FakturoidError: If the API answers with an error status
            httpx.TransportError: After all retry attempts are exhausted (at once for POST)
        """
        response: httpx.Response
        if method in IDEMPOTENT_METHODS:
            response = self._retrying(self._client.request, method, path, **kwargs)
        else:
            response = self._client.request(method, path, **kwargs)
        if response.is_error:
            raise FakturoidError.from_response(response)
        return response

    def _list_all(self, path: str, model: type[ModelT]) -> list[ModelT]:
        """Fetch every page of a listing endpoint.

        Pages are requested from 1 upwards until an empty page is returned.
        """
        items: list[ModelT] = []
        page = 1
        while True:
            response = self._request("GET", path, params={"page": page})
            batch = response.json()
            if not batch:
                break
            items.extend(model.model_validate(item) for item in batch)
            page += 1
        logger.debug(f"Listed {len(items)} items from {path}")
        return items

    def _mutate(self, method: str, path: str, **kwargs: Any) -> ApiResult:
        """Send a mutating request and wrap the outcome in an ApiResult."""
        try:
            response = self._request(method, path, **kwargs)
        except FakturoidError as e:
            logger.debug(f"{method} {path} failed: {e}")
            return ApiResult(success=False, error=str(e), status_code=e.status_code)

        remote_id = None
        if response.content:
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                remote_id = body.get("id")
        return ApiResult(success=True, remote_id=remote_id)

    # Subjects

    def list_subjects(self) -> list[RemoteSubject]:
        """List all subjects of the account.

        Raises:
            FakturoidError: If any page cannot be fetched
        """
        return self._list_all("subjects.json", RemoteSubject)

    def create_subject(self, subject: SubjectCreate) -> ApiResult:
        """Create a subject.

        Args:
            subject: Subject payload

        Returns:
            ApiResult with the new subject ID in remote_id
        """
        return self._mutate(
            "POST", "subjects.json", json=subject.model_dump(mode="json", exclude_none=True)
        )

    def delete_subject(self, subject_id: int) -> ApiResult:
        """Delete a subject. Subjects referenced by invoices cannot be deleted."""
        result = self._mutate("DELETE", f"subjects/{subject_id}.json")
        if result.success:
            result.remote_id = subject_id
        return result

    # Invoices

    def list_invoices(self) -> list[RemoteInvoice]:
        """List all invoices of the account.

        Raises:
            FakturoidError: If any page cannot be fetched
        """
        return self._list_all("invoices.json", RemoteInvoice)

    def create_invoice(self, invoice: InvoiceCreate) -> ApiResult:
        """Create an invoice.

        Args:
            invoice: Invoice payload

        Returns:
            ApiResult with the new invoice ID in remote_id
        """
        return self._mutate(
            "POST", "invoices.json", json=invoice.model_dump(mode="json", exclude_none=True)
        )

    def delete_invoice(self, invoice_id: int) -> ApiResult:
        result = self._mutate("DELETE", f"invoices/{invoice_id}.json")
        if result.success:
            result.remote_id = invoice_id
        return result

    def set_payment_status(
        self, invoice_id: int, status: PaymentStatus, paid_at: date | None = None
    ) -> ApiResult:
        """Change the payment status of an invoice.

        Args:
            invoice_id: Remote invoice ID
            status: Target payment status
            paid_at: Payment date (only used when marking as paid)

        Returns:
            ApiResult for the fired event
        """
        params: dict[str, str] = {"event": status.value}
        if status is PaymentStatus.PAID and paid_at is not None:
            params["paid_at"] = paid_at.isoformat()
        return self._fire(invoice_id, params)

    def send_message(self, invoice_id: int, message_type: MessageType) -> ApiResult:
        """Change the delivery status of an invoice.

        MessageType.NO_MESSAGE only marks the invoice as sent; no email goes out.
        """
        return self._fire(invoice_id, {"event": message_type.value})

    def _fire(self, invoice_id: int, params: dict[str, str]) -> ApiResult:
        result = self._mutate("POST", f"invoices/{invoice_id}/fire.json", params=params)
        if result.success:
            result.remote_id = invoice_id
        return result
