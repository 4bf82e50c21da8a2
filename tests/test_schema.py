"""Tests for column layout and typed row parsing."""

from datetime import date
from decimal import Decimal
from typing import Callable

import pytest

from ledger_import.exceptions import RowParseError
from ledger_import.importers.schema import (
    BorrowerRow,
    LoanRow,
    column_names,
    headings,
    named_values,
    parse_date,
    parse_decimal,
    parse_int,
    parse_row,
)
from ledger_import.models.ledger import EmploymentStatus, ImportKind, LoanStatus, RepaymentUnit


class TestColumns:
    """Tests for the per-kind column layout."""

    def test_column_counts(self) -> None:
        assert len(column_names(ImportKind.LOANS)) == 15
        assert len(column_names(ImportKind.REPAYMENTS)) == 9
        assert len(column_names(ImportKind.BORROWERS)) == 5

    def test_headings_follow_column_order(self) -> None:
        assert headings(ImportKind.BORROWERS)[0] == "Name (Text)"
        assert headings(ImportKind.LOANS)[-1].startswith("Last Repayment Date")

    def test_named_values_pads_missing(self) -> None:
        raw = named_values(["Jane", "123"], ImportKind.BORROWERS)
        assert raw == {
            "name": "Jane",
            "national_id": "123",
            "mobile": "",
            "email": "",
            "employment_status": "",
        }

    def test_named_values_ignores_extra(self) -> None:
        raw = named_values(["a", "b", "c", "d", "employed", "extra"], ImportKind.BORROWERS)
        assert raw["employment_status"] == "employed"
        assert len(raw) == 5


class TestScalarParsers:
    """Tests for date and number parsing helpers."""

    def test_parse_date(self) -> None:
        assert parse_date("2024-02-29") == date(2024, 2, 29)
        assert parse_date("2023-02-29") is None
        assert parse_date("2024/01/01") is None
        assert parse_date("") is None

    @pytest.mark.parametrize("text", ["", "abc", "NaN", "Infinity", "1,000"])
    def test_parse_decimal_rejects(self, text: str) -> None:
        assert parse_decimal(text) is None

    def test_parse_decimal(self) -> None:
        assert parse_decimal("12.5") == Decimal("12.5")
        assert parse_decimal("-3") == Decimal("-3")

    def test_parse_int(self) -> None:
        assert parse_int("6") == 6
        assert parse_int("6.0") is None
        assert parse_int("six") is None


class TestParseRow:
    """Tests for converting admissible rows."""

    def test_loan_row(self, loan_values: Callable[..., list[str]]) -> None:
        row = parse_row(loan_values(), ImportKind.LOANS)

        assert isinstance(row, LoanRow)
        assert row.issuance_date == date(2024, 1, 15)
        assert row.amount == Decimal("50000")
        assert row.repayment_unit == RepaymentUnit.MONTHS
        assert row.repayment_value == 6
        assert row.status == LoanStatus.RUNNING
        assert row.principal_balance == Decimal("42000")
        assert row.employment_status == EmploymentStatus.EMPLOYED
        assert row.last_repayment_date == date(2024, 2, 15)

    def test_loan_row_blank_optionals(self, loan_values: Callable[..., list[str]]) -> None:
        row = parse_row(
            loan_values(
                principal_balance="", interest_balance="", email="", last_repayment_date=""
            ),
            ImportKind.LOANS,
        )

        assert row.principal_balance is None
        assert row.interest_balance is None
        assert row.email is None
        assert row.last_repayment_date is None

    def test_repayment_row(self) -> None:
        values = ["Ln_00001A", "2024-02-15", "8000", "1200", "John", "1", "07", "Cash", ""]
        row = parse_row(values, ImportKind.REPAYMENTS)

        assert row.principal_amount == Decimal("8000")
        assert row.notes is None

    def test_borrower_row(self) -> None:
        row = parse_row(["Jane", "1", "07", "", "self-employed"], ImportKind.BORROWERS)

        assert isinstance(row, BorrowerRow)
        assert row.employment_status == EmploymentStatus.SELF_EMPLOYED

    def test_unparseable_value_raises(self, loan_values: Callable[..., list[str]]) -> None:
        with pytest.raises(RowParseError, match="amount"):
            parse_row(loan_values(amount="lots"), ImportKind.LOANS)
