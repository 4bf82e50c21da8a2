"""Repayment model for the loan ledger."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class PayerSnapshot:
    """Who made a payment, as written on the repayment record."""

    name: str
    national_id: str
    mobile: str


@dataclass
class Repayment:
    """Payment event against a loan number."""

    repayment_id: str
    loan_number: str  # Not checked against registered loans
    payment_date: date
    principal_amount: Decimal
    interest_amount: Decimal
    payer: PayerSnapshot
    payment_channel: str
    notes: str | None = None

    @property
    def total_amount(self) -> Decimal:
        """Principal plus interest paid."""
        return self.principal_amount + self.interest_amount
