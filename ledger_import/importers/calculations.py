"""Due date and flat interest calculations for loans."""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from dateutil.relativedelta import relativedelta

from ledger_import.models.ledger.enums import RepaymentUnit

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class LoanTerms:
    """Derived repayment terms of a loan."""

    due_date: date
    total_interest: Decimal
    expected_repayment: Decimal


def compute_due_date(issuance_date: date, unit: RepaymentUnit, value: int) -> date:
    """Add the repayment period to the issuance date.

    Months are calendar months. When the issuance day does not exist in
    the target month the surplus days roll over into the following
    month, so 2024-01-31 plus one month is 2024-03-02.

    Parameters
    ----------
    issuance_date : date
        Date the loan was issued.
    unit : RepaymentUnit
        Period unit (days, weeks, months).
    value : int
        Number of units, must be positive.

    Returns
    -------
    date
        Due date, never earlier than ``issuance_date``.
    """
    if value <= 0:
        raise ValueError(f"Repayment period value must be positive, got {value}")

    unit = RepaymentUnit(unit)
    if unit == RepaymentUnit.DAYS:
        return issuance_date + timedelta(days=value)
    elif unit == RepaymentUnit.WEEKS:
        return issuance_date + timedelta(weeks=value)
    due = issuance_date + relativedelta(months=value)
    # relativedelta clamps to the month end; carry the clamped days forward
    return due + timedelta(days=issuance_date.day - due.day)


def compute_total_interest(amount: Decimal, rate_percent: Decimal) -> Decimal:
    """Flat interest for the whole term: ``amount * rate / 100``.

    The rate applies once regardless of the period length; it is not
    annualized and not compounded.
    """
    return (amount * rate_percent / Decimal(100)).quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_expected_repayment(amount: Decimal, total_interest: Decimal) -> Decimal:
    """Principal plus total interest."""
    return amount + total_interest


def derive_loan_terms(
    issuance_date: date,
    amount: Decimal,
    rate_percent: Decimal,
    unit: RepaymentUnit,
    value: int,
) -> LoanTerms:
    """Compute due date, total interest and expected repayment together."""
    total_interest = compute_total_interest(amount, rate_percent)
    return LoanTerms(
        due_date=compute_due_date(issuance_date, unit, value),
        total_interest=total_interest,
        expected_repayment=compute_expected_repayment(amount, total_interest),
    )
