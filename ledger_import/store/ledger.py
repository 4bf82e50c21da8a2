"""In-memory ledger registry with typed commit operations."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Iterator

from ledger_import.exceptions import (
    DuplicateEntityError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
)
from ledger_import.models.base import Event
from ledger_import.models.ledger import Borrower, LedgerSettings, Loan, LoanStatus, Repayment
from ledger_import.sinks.serialization import to_dict

if TYPE_CHECKING:
    from ledger_import.importers.identifiers import IdSource
    from ledger_import.sinks import EventChannel

logger = logging.getLogger(__name__)

EVENT_SOURCE = "ledger_import"


@dataclass
class LedgerRegistry:
    """Borrowers, loans, repayments and settings of one ledger.

    All mutation goes through the ``add_*`` methods and
    :meth:`advance_loan_counter`. Callers that need several commits to
    see a consistent state (a whole import batch) hold :meth:`exclusive`.
    Every commit publishes an ``<entity>.added`` event to ``channel``
    when one is configured.
    """

    settings: LedgerSettings = field(default_factory=LedgerSettings)
    channel: EventChannel | None = None
    clock: Callable[[], datetime] = datetime.now
    id_source: IdSource | None = None

    borrowers: dict[str, Borrower] = field(default_factory=dict)
    loans: dict[str, Loan] = field(default_factory=dict)
    repayments: dict[str, Repayment] = field(default_factory=dict)

    # Indexes
    _by_national_id: dict[str, str] = field(default_factory=dict)
    _by_mobile: dict[str, str] = field(default_factory=dict)
    _by_loan_number: dict[str, str] = field(default_factory=dict)
    _borrower_loans: dict[str, list[str]] = field(default_factory=dict)
    _loan_repayments: dict[str, list[str]] = field(default_factory=dict)

    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _event_count: int = 0

    @contextmanager
    def exclusive(self) -> Iterator[LedgerRegistry]:
        """Hold the single-writer lock for a sequence of commits."""
        with self._lock:
            yield self

    # Queries
    def find_borrower(self, national_id: str, mobile: str) -> Borrower | None:
        """Find a borrower sharing the national ID or the mobile number.

        Keys compare as exact strings, so a blank key matches a borrower
        registered with the same blank key.
        """
        borrower_id = self._by_national_id.get(national_id)
        if borrower_id is None:
            borrower_id = self._by_mobile.get(mobile)
        return self.borrowers[borrower_id] if borrower_id else None

    def get_borrower(self, borrower_id: str) -> Borrower | None:
        return self.borrowers.get(borrower_id)

    def get_borrower_loans(self, borrower_id: str) -> list[Loan]:
        """Get all loans of a borrower in commit order."""
        loan_ids = self._borrower_loans.get(borrower_id, [])
        return [self.loans[lid] for lid in loan_ids]

    def get_loan_by_number(self, loan_number: str) -> Loan | None:
        loan_id = self._by_loan_number.get(loan_number)
        return self.loans[loan_id] if loan_id else None

    def get_loan_repayments(self, loan_number: str) -> list[Repayment]:
        """Get repayments recorded against a loan number."""
        repayment_ids = self._loan_repayments.get(loan_number, [])
        return [self.repayments[rid] for rid in repayment_ids]

    # Commits
    def add_borrower(self, borrower: Borrower) -> None:
        """Register a borrower.

        Raises
        ------
        DuplicateEntityError
            If the id, national ID or mobile is already registered.
        """
        with self._lock:
            self._check_new_borrower(borrower)
            self._insert_borrower(borrower)
        self._publish("borrower.added", borrower.borrower_id, borrower)

    def add_loan(self, loan: Loan, staged_borrower: Borrower | None = None) -> None:
        """Register a loan, together with its borrower when newly staged.

        Every check runs before anything is stored, so a failure leaves
        neither the loan nor the staged borrower behind.

        Raises
        ------
        DuplicateEntityError
            If the loan number or staged borrower is already registered.
        ReferentialIntegrityError
            If the loan's borrower is neither registered nor staged.
        InvalidEntityStateError
            If the due date precedes the issuance date.
        """
        with self._lock:
            if staged_borrower is not None:
                self._check_new_borrower(staged_borrower)
                if staged_borrower.borrower_id != loan.borrower_id:
                    raise ReferentialIntegrityError(
                        f"Loan {loan.loan_number} does not reference staged borrower "
                        f"{staged_borrower.borrower_id}"
                    )
            elif loan.borrower_id not in self.borrowers:
                raise ReferentialIntegrityError(f"Borrower {loan.borrower_id} not found")

            if loan.loan_number in self._by_loan_number:
                raise DuplicateEntityError(f"Loan number {loan.loan_number} already exists")
            if loan.loan_id in self.loans:
                raise DuplicateEntityError(f"Loan {loan.loan_id} already exists")
            if loan.due_date < loan.issuance_date:
                raise InvalidEntityStateError(
                    f"Loan {loan.loan_number} is due before it was issued"
                )

            if staged_borrower is not None:
                self._insert_borrower(staged_borrower)

            self.loans[loan.loan_id] = loan
            self._by_loan_number[loan.loan_number] = loan.loan_id
            self._borrower_loans[loan.borrower_id].append(loan.loan_id)

            borrower = self.borrowers[loan.borrower_id]
            borrower.total_loans += 1
            if loan.status == LoanStatus.RUNNING:
                borrower.active_loans += 1

        if staged_borrower is not None:
            self._publish("borrower.added", staged_borrower.borrower_id, staged_borrower)
        self._publish("loan.added", loan.loan_id, loan)

    def add_repayment(self, repayment: Repayment) -> None:
        """Record a repayment; the loan number is not looked up."""
        with self._lock:
            if repayment.repayment_id in self.repayments:
                raise DuplicateEntityError(f"Repayment {repayment.repayment_id} already exists")
            self.repayments[repayment.repayment_id] = repayment
            self._loan_repayments.setdefault(repayment.loan_number, []).append(
                repayment.repayment_id
            )
        self._publish("repayment.added", repayment.repayment_id, repayment)

    def advance_loan_counter(self, next_loan_number: int) -> None:
        """Persist the counter after loans have been numbered.

        Raises
        ------
        InvalidEntityStateError
            If the counter would move backwards.
        """
        with self._lock:
            current = self.settings.next_loan_number
            if next_loan_number < current:
                raise InvalidEntityStateError(
                    f"Loan counter cannot move back from {current} to {next_loan_number}"
                )
            self.settings.next_loan_number = next_loan_number
        logger.debug("Loan counter advanced %d -> %d", current, next_loan_number)

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "borrowers": len(self.borrowers),
            "loans": len(self.loans),
            "repayments": len(self.repayments),
            "next_loan_number": self.settings.next_loan_number,
        }

    def _check_new_borrower(self, borrower: Borrower) -> None:
        if borrower.borrower_id in self.borrowers:
            raise DuplicateEntityError(f"Borrower {borrower.borrower_id} already exists")
        if self.find_borrower(borrower.national_id, borrower.mobile) is not None:
            raise DuplicateEntityError("Borrower with this National ID or Mobile already exists")

    def _insert_borrower(self, borrower: Borrower) -> None:
        self.borrowers[borrower.borrower_id] = borrower
        self._by_national_id[borrower.national_id] = borrower.borrower_id
        self._by_mobile[borrower.mobile] = borrower.borrower_id
        self._borrower_loans[borrower.borrower_id] = []

    def _publish(self, event_type: str, subject: str, entity: object) -> None:
        if self.channel is None:
            return
        self._event_count += 1
        # The entity is already committed; nothing raised from here may escape
        try:
            if self.id_source is not None:
                event_id = self.id_source.next_id()
            else:
                event_id = f"evt-{self._event_count:06d}"
            event = Event(
                event_id=event_id,
                event_type=event_type,
                event_time=self.clock(),
                source=EVENT_SOURCE,
                subject=subject,
                data=to_dict(entity),
            )
            self.channel.publish(event)
        except Exception as e:
            logger.error("Failed to publish %s for %s: %s", event_type, subject, e)
