"""Per-item and per-phase outcomes of an import run."""

from typing import Literal

from pydantic import BaseModel, Field


class ItemResult(BaseModel):
    """Outcome of processing a single item.

    Attributes:
        item_id: Legacy ID (imports) or remote ID (purge) of the item
        success: Whether the item was processed
        remote_id: Remote ID created for the item, if any
        error: Reason the item failed or was skipped
    """

    item_id: int
    success: bool
    remote_id: int | None = None
    error: str | None = None


class PhaseReport(BaseModel):
    """Collected results of one phase."""

    phase: Literal["purge_invoices", "purge_subjects", "contacts", "invoices"]
    results: list[ItemResult] = Field(default_factory=list)

    def add(self, result: ItemResult) -> ItemResult:
        self.results.append(result)
        return result

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.success)

    def summary(self) -> str:
        return f"{self.phase}: {self.succeeded} OK, {self.failed} failed"


class ImportReport(BaseModel):
    """Results of a complete run."""

    purge_invoices: PhaseReport
    purge_subjects: PhaseReport
    contacts: PhaseReport
    invoices: PhaseReport

    def phases(self) -> list[PhaseReport]:
        return [self.purge_invoices, self.purge_subjects, self.contacts, self.invoices]
