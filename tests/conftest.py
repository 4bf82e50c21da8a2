"""Pytest configuration and fixtures."""

from datetime import datetime
from typing import Callable

import pytest

from ledger_import.importers import BatchCoordinator, SequentialIdSource
from ledger_import.models.ledger import ImportKind, LedgerSettings
from ledger_import.store import LedgerRegistry

LOAN_HEADER = (
    "Issuance Date,Amount,Loan Type,Repayment Period Type,Repayment Period Value,"
    "Interest Rate,Status,Principal Balance,Interest Balance,Loanee Name,National ID,"
    "Mobile,Email,Employment Status,Last Repayment Date"
)
REPAYMENT_HEADER = (
    "Loan Number,Payment Date,Principal Amount,Interest Amount,Payer Name,"
    "Payer National ID,Payer Mobile,Payment Channel,Notes"
)
BORROWER_HEADER = "Name,National ID,Mobile,Email,Employment Status"

LOAN_DEFAULTS = {
    "issuance_date": "2024-01-15",
    "amount": "50000",
    "loan_type": "Personal Loan",
    "repayment_unit": "months",
    "repayment_value": "6",
    "interest_rate": "15",
    "status": "running",
    "principal_balance": "42000",
    "interest_balance": "6500",
    "borrower_name": "John Doe",
    "national_id": "12345678",
    "mobile": "0712345678",
    "email": "john@email.com",
    "employment_status": "employed",
    "last_repayment_date": "2024-02-15",
}


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock frozen at 2024-03-01 09:00."""
    return lambda: datetime(2024, 3, 1, 9, 0)


@pytest.fixture
def settings() -> LedgerSettings:
    """Settings with two loan types and the default channels."""
    return LedgerSettings(
        loan_types=["Personal Loan", "Business Loan"],
        loan_number_prefix="Ln_",
        loan_number_suffix="A",
        next_loan_number=1,
    )


@pytest.fixture
def registry(settings: LedgerSettings, fixed_clock: Callable[[], datetime]) -> LedgerRegistry:
    """Empty registry with deterministic ids and time."""
    return LedgerRegistry(
        settings=settings,
        clock=fixed_clock,
        id_source=SequentialIdSource("id"),
    )


@pytest.fixture
def coordinator(registry: LedgerRegistry) -> BatchCoordinator:
    """Coordinator bound to the test registry."""
    return BatchCoordinator(registry)


@pytest.fixture
def loan_values() -> Callable[..., list[str]]:
    """Factory for loan row values; keyword arguments override fields."""

    def build(**overrides: str) -> list[str]:
        fields = {**LOAN_DEFAULTS, **overrides}
        return [fields[name] for name in LOAN_DEFAULTS]

    return build


@pytest.fixture
def loan_file(loan_values: Callable[..., list[str]]) -> Callable[..., str]:
    """Factory for loan upload text from dicts of field overrides."""

    def build(*rows: dict[str, str]) -> str:
        lines = [LOAN_HEADER] + [",".join(loan_values(**row)) for row in rows]
        return "\n".join(lines) + "\n"

    return build


@pytest.fixture
def upload() -> Callable[..., str]:
    """Factory for upload text of any kind from raw data lines."""
    header_lines = {
        ImportKind.LOANS: LOAN_HEADER,
        ImportKind.REPAYMENTS: REPAYMENT_HEADER,
        ImportKind.BORROWERS: BORROWER_HEADER,
    }

    def build(kind: ImportKind, *lines: str) -> str:
        return "\n".join([header_lines[kind], *lines]) + "\n"

    return build
