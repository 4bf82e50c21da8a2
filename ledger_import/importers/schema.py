"""Column layout and typed rows for each import kind.

Raw rows are positional string tuples. :func:`named_values` maps them to
field names once, :func:`parse_row` turns an admissible row into a
typed row dataclass; nothing downstream indexes by position.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Sequence, Union

from ledger_import.exceptions import RowParseError
from ledger_import.models.ledger.enums import (
    EmploymentStatus,
    ImportKind,
    LoanStatus,
    RepaymentUnit,
)

DATE_FORMAT = "%Y-%m-%d"

# (field name, template heading) in file column order
COLUMNS: dict[ImportKind, tuple[tuple[str, str], ...]] = {
    ImportKind.LOANS: (
        ("issuance_date", "Issuance Date (YYYY-MM-DD)"),
        ("amount", "Amount (Number)"),
        ("loan_type", "Loan Type"),
        ("repayment_unit", "Repayment Period Type (days | weeks | months)"),
        ("repayment_value", "Repayment Period Value (Number)"),
        ("interest_rate", "Interest Rate (Number)"),
        ("status", "Status (running | repaid)"),
        ("principal_balance", "Principal Balance (Number)"),
        ("interest_balance", "Interest Balance (Number)"),
        ("borrower_name", "Loanee Name (Text)"),
        ("national_id", "National ID (Text)"),
        ("mobile", "Mobile (Text)"),
        ("email", "Email (Text)"),
        ("employment_status", "Employment Status (employed | self-employed)"),
        ("last_repayment_date", "Last Repayment Date (YYYY-MM-DD) - Optional"),
    ),
    ImportKind.REPAYMENTS: (
        ("loan_number", "Loan Number (Text)"),
        ("payment_date", "Payment Date (YYYY-MM-DD)"),
        ("principal_amount", "Principal Amount (Number)"),
        ("interest_amount", "Interest Amount (Number)"),
        ("payer_name", "Payer Name (Text)"),
        ("payer_national_id", "Payer National ID (Text)"),
        ("payer_mobile", "Payer Mobile (Text)"),
        ("payment_channel", "Payment Channel"),
        ("notes", "Notes (Text) - Optional"),
    ),
    ImportKind.BORROWERS: (
        ("name", "Name (Text)"),
        ("national_id", "National ID (Text)"),
        ("mobile", "Mobile (Text)"),
        ("email", "Email (Text)"),
        ("employment_status", "Employment Status (employed | self-employed)"),
    ),
}


@dataclass(frozen=True)
class LoanRow:
    issuance_date: date
    amount: Decimal
    loan_type: str
    repayment_unit: RepaymentUnit
    repayment_value: int
    interest_rate: Decimal
    status: LoanStatus
    principal_balance: Decimal | None
    interest_balance: Decimal | None
    borrower_name: str
    national_id: str
    mobile: str
    email: str | None
    employment_status: EmploymentStatus
    last_repayment_date: date | None


@dataclass(frozen=True)
class RepaymentRow:
    loan_number: str
    payment_date: date
    principal_amount: Decimal
    interest_amount: Decimal
    payer_name: str
    payer_national_id: str
    payer_mobile: str
    payment_channel: str
    notes: str | None


@dataclass(frozen=True)
class BorrowerRow:
    name: str
    national_id: str
    mobile: str
    email: str | None
    employment_status: EmploymentStatus


ParsedRow = Union[LoanRow, RepaymentRow, BorrowerRow]


def column_names(kind: ImportKind) -> list[str]:
    """Field names of ``kind`` in file order."""
    return [name for name, _ in COLUMNS[ImportKind(kind)]]


def headings(kind: ImportKind) -> list[str]:
    """Header line values of ``kind`` in file order."""
    return [heading for _, heading in COLUMNS[ImportKind(kind)]]


def named_values(values: Sequence[str], kind: ImportKind) -> dict[str, str]:
    """Map positional values to field names; missing columns read as ``""``."""
    return {
        name: values[position] if position < len(values) else ""
        for position, name in enumerate(column_names(kind))
    }


def parse_date(text: str) -> date | None:
    """Parse ``YYYY-MM-DD``; ``None`` when it is not a calendar date."""
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


def parse_decimal(text: str) -> Decimal | None:
    """Parse a finite decimal number; ``None`` otherwise."""
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def parse_int(text: str) -> int | None:
    """Parse a whole number written without a fraction; ``None`` otherwise."""
    try:
        return int(text)
    except ValueError:
        return None


def _required(value, field_name: str, text: str):
    if value is None:
        raise RowParseError(f"Cannot parse {field_name} from {text!r}")
    return value


def _optional_decimal(field_name: str, text: str) -> Decimal | None:
    return _required(parse_decimal(text), field_name, text) if text else None


def parse_loan_row(values: Sequence[str]) -> LoanRow:
    raw = named_values(values, ImportKind.LOANS)
    last_repayment = raw["last_repayment_date"]
    return LoanRow(
        issuance_date=_required(
            parse_date(raw["issuance_date"]), "issuance date", raw["issuance_date"]
        ),
        amount=_required(parse_decimal(raw["amount"]), "amount", raw["amount"]),
        loan_type=raw["loan_type"],
        repayment_unit=RepaymentUnit(raw["repayment_unit"]),
        repayment_value=_required(
            parse_int(raw["repayment_value"]), "repayment period value", raw["repayment_value"]
        ),
        interest_rate=_required(
            parse_decimal(raw["interest_rate"]), "interest rate", raw["interest_rate"]
        ),
        status=LoanStatus(raw["status"]),
        principal_balance=_optional_decimal("principal balance", raw["principal_balance"]),
        interest_balance=_optional_decimal("interest balance", raw["interest_balance"]),
        borrower_name=raw["borrower_name"],
        national_id=raw["national_id"],
        mobile=raw["mobile"],
        email=raw["email"] or None,
        employment_status=EmploymentStatus(raw["employment_status"]),
        last_repayment_date=(
            _required(parse_date(last_repayment), "last repayment date", last_repayment)
            if last_repayment
            else None
        ),
    )


def parse_repayment_row(values: Sequence[str]) -> RepaymentRow:
    raw = named_values(values, ImportKind.REPAYMENTS)
    return RepaymentRow(
        loan_number=raw["loan_number"],
        payment_date=_required(
            parse_date(raw["payment_date"]), "payment date", raw["payment_date"]
        ),
        principal_amount=_required(
            parse_decimal(raw["principal_amount"]), "principal amount", raw["principal_amount"]
        ),
        interest_amount=_required(
            parse_decimal(raw["interest_amount"]), "interest amount", raw["interest_amount"]
        ),
        payer_name=raw["payer_name"],
        payer_national_id=raw["payer_national_id"],
        payer_mobile=raw["payer_mobile"],
        payment_channel=raw["payment_channel"],
        notes=raw["notes"] or None,
    )


def parse_borrower_row(values: Sequence[str]) -> BorrowerRow:
    raw = named_values(values, ImportKind.BORROWERS)
    return BorrowerRow(
        name=raw["name"],
        national_id=raw["national_id"],
        mobile=raw["mobile"],
        email=raw["email"] or None,
        employment_status=EmploymentStatus(raw["employment_status"]),
    )


_PARSERS = {
    ImportKind.LOANS: parse_loan_row,
    ImportKind.REPAYMENTS: parse_repayment_row,
    ImportKind.BORROWERS: parse_borrower_row,
}


def parse_row(values: Sequence[str], kind: ImportKind) -> ParsedRow:
    """Convert an admissible row into its typed row.

    Raises
    ------
    RowParseError
        If a value cannot be converted. Enum fields raise ``ValueError``
        for values the validator would have rejected.
    """
    return _PARSERS[ImportKind(kind)](values)
