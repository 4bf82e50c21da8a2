"""Ledger settings consumed by the import engine."""

from dataclasses import dataclass, field, replace
from decimal import Decimal

DEFAULT_LOAN_TYPES = ["Personal Loan", "Business Loan", "Emergency Loan"]
DEFAULT_PAYMENT_CHANNELS = ["Cash", "Bank Transfer", "Mobile Money", "Cheque"]


@dataclass
class LedgerSettings:
    """Process-wide ledger configuration.

    Everything except ``next_loan_number`` is read-only for the engine;
    the counter is advanced once per committed loan.
    """

    loan_types: list[str] = field(default_factory=lambda: list(DEFAULT_LOAN_TYPES))
    payment_channels: list[str] = field(
        default_factory=lambda: list(DEFAULT_PAYMENT_CHANNELS)
    )
    loan_number_prefix: str = "Ln_"
    loan_number_suffix: str = "A"
    default_interest_rate: Decimal = Decimal("15")
    next_loan_number: int = 1

    def snapshot(self) -> "LedgerSettings":
        """Return an independent copy for the duration of a batch."""
        return replace(
            self,
            loan_types=list(self.loan_types),
            payment_channels=list(self.payment_channels),
        )
