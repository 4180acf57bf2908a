"""Legacy contact ID to Fakturoid subject ID mapping."""

from collections.abc import Iterator


class UnknownContactError(LookupError):
    """Raised when an invoice references a contact that was never imported."""

    def __init__(self, contact_id: int) -> None:
        super().__init__(f"Legacy contact #{contact_id} has no imported subject")
        self.contact_id = contact_id


class RemapTable:
    """In-memory mapping filled by contact import and read by invoice import.

    Lives only for the duration of a run.
    """

    def __init__(self) -> None:
        self._subject_ids: dict[int, int] = {}

    def record(self, contact_id: int, subject_id: int) -> None:
        """Store the subject created for a legacy contact.

        Raises:
            ValueError: If the contact was already recorded
        """
        if contact_id in self._subject_ids:
            raise ValueError(
                f"Legacy contact #{contact_id} already mapped to subject "
                f"{self._subject_ids[contact_id]}"
            )
        self._subject_ids[contact_id] = subject_id

    def lookup(self, contact_id: int) -> int:
        """Return the subject ID for a legacy contact.

        Raises:
            UnknownContactError: If the contact is not in the table
        """
        try:
            return self._subject_ids[contact_id]
        except KeyError:
            raise UnknownContactError(contact_id) from None

    def __contains__(self, contact_id: object) -> bool:
        return contact_id in self._subject_ids

    def __len__(self) -> int:
        return len(self._subject_ids)

    def __iter__(self) -> Iterator[int]:
        return iter(self._subject_ids)
