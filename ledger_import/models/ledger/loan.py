"""Loan model for the loan ledger."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ledger_import.models.ledger.borrower import BorrowerSnapshot
from ledger_import.models.ledger.enums import LoanStatus, RepaymentUnit


@dataclass
class Loan:
    """Single credit extension with its derived repayment terms."""

    loan_id: str
    loan_number: str  # e.g. Ln_00001A, never reassigned
    borrower_id: str
    issuance_date: date
    amount: Decimal
    loan_type: str
    repayment_unit: RepaymentUnit
    repayment_value: int
    interest_rate: Decimal  # Percent for the whole term (15 = 15%)
    total_interest: Decimal
    due_date: date
    expected_repayment: Decimal
    principal_balance: Decimal
    interest_balance: Decimal
    status: LoanStatus
    borrower: BorrowerSnapshot
    last_repayment_date: date | None = None
