"""Borrower identity resolution against the registry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from ledger_import.importers.identifiers import IdSource
from ledger_import.models.ledger import Borrower, EmploymentStatus
from ledger_import.store.ledger import LedgerRegistry


@dataclass(frozen=True)
class BorrowerCandidate:
    """Identity fields of a borrower as read from an import row."""

    name: str
    national_id: str
    mobile: str
    email: str | None
    employment_status: EmploymentStatus


@dataclass(frozen=True)
class Resolution:
    """Outcome of :meth:`BorrowerResolver.resolve_or_stage`.

    When ``created`` is true the borrower is staged only; it must be
    committed along with the row that references it.
    """

    borrower: Borrower
    created: bool


class BorrowerResolver:
    """Match candidates to registered borrowers by natural key.

    Parameters
    ----------
    registry : LedgerRegistry
        Registry to look borrowers up in. It is never mutated here.
    id_source : IdSource
        Supplier of ids for staged borrowers.
    clock : Callable[[], datetime]
        Source of the ``date_added`` of staged borrowers.
    """

    def __init__(
        self,
        registry: LedgerRegistry,
        id_source: IdSource,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.registry = registry
        self.id_source = id_source
        self.clock = clock

    def find_existing(self, national_id: str, mobile: str) -> Borrower | None:
        """Registered borrower with the same national ID or mobile."""
        return self.registry.find_borrower(national_id, mobile)

    def resolve_or_stage(self, candidate: BorrowerCandidate) -> Resolution:
        """Return the matching borrower, or stage a new one.

        An existing borrower is returned as registered, even when the
        candidate's other fields differ.
        """
        existing = self.find_existing(candidate.national_id, candidate.mobile)
        if existing is not None:
            return Resolution(borrower=existing, created=False)

        return Resolution(borrower=self.build(candidate), created=True)

    def build(self, candidate: BorrowerCandidate) -> Borrower:
        """Create an unregistered borrower from a candidate."""
        return Borrower(
            borrower_id=self.id_source.next_id(),
            name=candidate.name,
            national_id=candidate.national_id,
            mobile=candidate.mobile,
            email=candidate.email,
            employment_status=candidate.employment_status,
            date_added=self.clock().date(),
        )
