"""Tests for due date and interest calculations."""

from datetime import date
from decimal import Decimal

import pytest

from ledger_import.importers.calculations import (
    compute_due_date,
    compute_expected_repayment,
    compute_total_interest,
    derive_loan_terms,
)
from ledger_import.models.ledger import RepaymentUnit


class TestDueDate:
    """Tests for compute_due_date."""

    @pytest.mark.parametrize(
        "unit,value,expected",
        [
            (RepaymentUnit.DAYS, 30, date(2024, 2, 14)),
            (RepaymentUnit.WEEKS, 2, date(2024, 1, 29)),
            (RepaymentUnit.MONTHS, 6, date(2024, 7, 15)),
            (RepaymentUnit.MONTHS, 12, date(2025, 1, 15)),
        ],
    )
    def test_periods(self, unit: RepaymentUnit, value: int, expected: date) -> None:
        assert compute_due_date(date(2024, 1, 15), unit, value) == expected

    def test_month_end_rolls_over(self) -> None:
        """Test that days missing from a short month carry into the next."""
        assert compute_due_date(date(2024, 1, 31), RepaymentUnit.MONTHS, 1) == date(2024, 3, 2)
        assert compute_due_date(date(2023, 1, 31), RepaymentUnit.MONTHS, 1) == date(2023, 3, 3)
        assert compute_due_date(date(2024, 3, 31), RepaymentUnit.MONTHS, 1) == date(2024, 5, 1)
        assert compute_due_date(date(2024, 1, 31), RepaymentUnit.MONTHS, 3) == date(2024, 5, 1)
        assert compute_due_date(date(2024, 2, 29), RepaymentUnit.MONTHS, 12) == date(2025, 3, 1)

    def test_existing_day_kept(self) -> None:
        assert compute_due_date(date(2024, 1, 31), RepaymentUnit.MONTHS, 2) == date(2024, 3, 31)

    def test_days_cross_year(self) -> None:
        assert compute_due_date(date(2023, 12, 20), "days", 15) == date(2024, 1, 4)

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_value_rejected(self, value: int) -> None:
        with pytest.raises(ValueError):
            compute_due_date(date(2024, 1, 15), RepaymentUnit.DAYS, value)

    def test_unknown_unit_rejected(self) -> None:
        with pytest.raises(ValueError):
            compute_due_date(date(2024, 1, 15), "years", 1)


class TestInterest:
    """Tests for flat interest."""

    def test_flat_rate(self) -> None:
        assert compute_total_interest(Decimal("50000"), Decimal("15")) == Decimal("7500.00")

    def test_rate_not_annualized(self) -> None:
        """Test that the period length does not change the interest."""
        short = derive_loan_terms(
            date(2024, 1, 1), Decimal("1000"), Decimal("10"), RepaymentUnit.DAYS, 7
        )
        long = derive_loan_terms(
            date(2024, 1, 1), Decimal("1000"), Decimal("10"), RepaymentUnit.MONTHS, 24
        )
        assert short.total_interest == long.total_interest == Decimal("100.00")

    def test_zero_rate(self) -> None:
        assert compute_total_interest(Decimal("1000"), Decimal("0")) == Decimal("0.00")

    def test_rounded_half_up_to_cents(self) -> None:
        assert compute_total_interest(Decimal("0.5"), Decimal("1")) == Decimal("0.01")
        assert compute_total_interest(Decimal("333.33"), Decimal("12.5")) == Decimal("41.67")

    def test_expected_repayment(self) -> None:
        assert compute_expected_repayment(Decimal("50000"), Decimal("7500")) == Decimal("57500")


class TestDeriveLoanTerms:
    """Tests for derive_loan_terms."""

    def test_terms(self) -> None:
        terms = derive_loan_terms(
            date(2024, 1, 15), Decimal("50000"), Decimal("15"), RepaymentUnit.MONTHS, 6
        )

        assert terms.due_date == date(2024, 7, 15)
        assert terms.total_interest == Decimal("7500.00")
        assert terms.expected_repayment == Decimal("57500.00")
