"""Ledger domain models."""

from ledger_import.models.ledger.borrower import Borrower, BorrowerSnapshot
from ledger_import.models.ledger.enums import (
    EmploymentStatus,
    ImportKind,
    LoanStatus,
    RepaymentUnit,
)
from ledger_import.models.ledger.loan import Loan
from ledger_import.models.ledger.repayment import PayerSnapshot, Repayment
from ledger_import.models.ledger.settings import LedgerSettings

__all__ = [
    "Borrower",
    "BorrowerSnapshot",
    "EmploymentStatus",
    "ImportKind",
    "LedgerSettings",
    "Loan",
    "LoanStatus",
    "PayerSnapshot",
    "Repayment",
    "RepaymentUnit",
]
