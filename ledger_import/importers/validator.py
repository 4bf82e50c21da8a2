"""Field-level validation of raw import rows."""

from __future__ import annotations

from typing import Callable, Sequence

from ledger_import.importers.schema import named_values, parse_date, parse_decimal, parse_int
from ledger_import.models.ledger.enums import (
    EmploymentStatus,
    ImportKind,
    LoanStatus,
    RepaymentUnit,
)
from ledger_import.models.ledger.settings import LedgerSettings

EMPLOYMENT_STATUSES = [status.value for status in EmploymentStatus]
REPAYMENT_UNITS = [unit.value for unit in RepaymentUnit]
LOAN_STATUSES = [status.value for status in LoanStatus]

EMPLOYMENT_STATUS_MESSAGE = 'Employment status must be either "employed" or "self-employed"'


def _is_positive_number(text: str) -> bool:
    value = parse_decimal(text)
    return value is not None and value > 0


def _is_non_negative_number(text: str) -> bool:
    value = parse_decimal(text)
    return value is not None and value >= 0


def validate_loan_row(values: Sequence[str], settings: LedgerSettings) -> list[str]:
    """Collect every rule violation of a loan row, in column order."""
    raw = named_values(values, ImportKind.LOANS)
    errors: list[str] = []

    if parse_date(raw["issuance_date"]) is None:
        errors.append("Invalid issuance date format. Use YYYY-MM-DD")

    if not _is_positive_number(raw["amount"]):
        errors.append("Amount must be a positive number")

    if raw["loan_type"] not in settings.loan_types:
        errors.append(f"Loan type must be one of: {', '.join(settings.loan_types)}")

    if raw["repayment_unit"] not in REPAYMENT_UNITS:
        errors.append("Repayment period type must be: days, weeks, or months")

    period_value = parse_int(raw["repayment_value"])
    if period_value is None or period_value <= 0:
        errors.append("Repayment period value must be a positive number")

    if not _is_non_negative_number(raw["interest_rate"]):
        errors.append("Interest rate must be a non-negative number")

    if raw["status"] not in LOAN_STATUSES:
        errors.append('Status must be either "running" or "repaid"')

    # Blank balances default to the full amount and interest
    if raw["principal_balance"] and not _is_non_negative_number(raw["principal_balance"]):
        errors.append("Principal balance must be a non-negative number")
    if raw["interest_balance"] and not _is_non_negative_number(raw["interest_balance"]):
        errors.append("Interest balance must be a non-negative number")

    if raw["employment_status"] not in EMPLOYMENT_STATUSES:
        errors.append(EMPLOYMENT_STATUS_MESSAGE)

    if raw["last_repayment_date"] and parse_date(raw["last_repayment_date"]) is None:
        errors.append("Invalid last repayment date format. Use YYYY-MM-DD")

    return errors


def validate_repayment_row(values: Sequence[str], settings: LedgerSettings) -> list[str]:
    """Check that a repayment row parses.

    Amounts are not range-checked and the loan number is not looked up.
    """
    raw = named_values(values, ImportKind.REPAYMENTS)
    errors: list[str] = []

    if parse_date(raw["payment_date"]) is None:
        errors.append("Invalid payment date format. Use YYYY-MM-DD")

    if parse_decimal(raw["principal_amount"]) is None:
        errors.append("Principal amount must be a number")

    if parse_decimal(raw["interest_amount"]) is None:
        errors.append("Interest amount must be a number")

    if raw["payment_channel"] not in settings.payment_channels:
        errors.append(f"Payment channel must be one of: {', '.join(settings.payment_channels)}")

    return errors


def validate_borrower_row(values: Sequence[str], settings: LedgerSettings) -> list[str]:
    raw = named_values(values, ImportKind.BORROWERS)
    errors: list[str] = []

    if not raw["name"]:
        errors.append("Name is required")

    if not raw["national_id"]:
        errors.append("National ID is required")

    if not raw["mobile"]:
        errors.append("Mobile number is required")

    if raw["employment_status"] not in EMPLOYMENT_STATUSES:
        errors.append(EMPLOYMENT_STATUS_MESSAGE)

    return errors


_VALIDATORS: dict[ImportKind, Callable[[Sequence[str], LedgerSettings], list[str]]] = {
    ImportKind.LOANS: validate_loan_row,
    ImportKind.REPAYMENTS: validate_repayment_row,
    ImportKind.BORROWERS: validate_borrower_row,
}


def validate_row(
    values: Sequence[str], kind: ImportKind, settings: LedgerSettings
) -> list[str]:
    """Validate one raw row against the rules of its import kind.

    Parameters
    ----------
    values : Sequence[str]
        Trimmed field values in file column order.
    kind : ImportKind
        Which rule set to apply.
    settings : LedgerSettings
        Settings snapshot supplying loan types and payment channels.

    Returns
    -------
    list[str]
        Human-readable violations; empty when the row is admissible.
    """
    return _VALIDATORS[ImportKind(kind)](values, settings)
