"""Borrower model for the loan ledger."""

from dataclasses import dataclass
from datetime import date

from ledger_import.models.ledger.enums import EmploymentStatus


@dataclass
class Borrower:
    """Borrower (loanee) identity and contact record.

    ``national_id`` and ``mobile`` form the natural key: either one
    identifies the borrower for duplicate detection.
    """

    borrower_id: str
    name: str
    national_id: str
    mobile: str
    email: str | None
    employment_status: EmploymentStatus
    date_added: date
    total_loans: int = 0
    active_loans: int = 0

    def snapshot(self) -> "BorrowerSnapshot":
        """Copy the identity fields for embedding in a loan."""
        return BorrowerSnapshot(
            name=self.name,
            national_id=self.national_id,
            mobile=self.mobile,
            email=self.email,
            employment_status=self.employment_status,
        )


@dataclass(frozen=True)
class BorrowerSnapshot:
    """Borrower identity as it was when a loan was issued."""

    name: str
    national_id: str
    mobile: str
    email: str | None
    employment_status: EmploymentStatus
