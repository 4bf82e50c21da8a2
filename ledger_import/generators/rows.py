"""Generators of realistic rows for loan, repayment and borrower imports."""

from __future__ import annotations

import random
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Iterator, Sequence

from ledger_import.generators.base import BaseGenerator
from ledger_import.importers.calculations import compute_due_date, compute_total_interest
from ledger_import.importers.decoder import DEFAULT_DELIMITER
from ledger_import.importers.schema import DATE_FORMAT, headings, named_values
from ledger_import.models.ledger import (
    EmploymentStatus,
    ImportKind,
    LedgerSettings,
    LoanStatus,
    RepaymentUnit,
)


class BorrowerRowGenerator(BaseGenerator):
    """Generate borrower rows with unique national IDs and mobiles."""

    EMPLOYMENT_WEIGHTS = [0.7, 0.3]

    def generate(self) -> list[str]:
        """Generate one row in borrower column order."""
        employment = random.choices(list(EmploymentStatus), weights=self.EMPLOYMENT_WEIGHTS, k=1)[0]
        return [
            self.fake.name(),
            self.fake.unique.numerify("########"),
            self.fake.unique.numerify("07########"),
            self.fake.email(),
            employment.value,
        ]

    def generate_batch(self, count: int) -> Iterator[list[str]]:
        for _ in range(count):
            yield self.generate()


class LoanRowGenerator(BaseGenerator):
    """Generate loan rows for the configured loan types.

    Parameters
    ----------
    settings : LedgerSettings
        Supplies the loan types rows are drawn from.
    seed : int | None
        Random seed for reproducibility.
    """

    # (unit, candidate period values)
    PERIODS = [
        (RepaymentUnit.MONTHS, [1, 3, 6, 12, 24]),
        (RepaymentUnit.WEEKS, [2, 4, 8, 12]),
        (RepaymentUnit.DAYS, [7, 14, 30, 60]),
    ]
    PERIOD_WEIGHTS = [0.7, 0.2, 0.1]
    RATES = ["10", "12.5", "15", "18", "20"]

    def __init__(self, settings: LedgerSettings, seed: int | None = None) -> None:
        super().__init__(seed)
        self.settings = settings
        self._borrowers = BorrowerRowGenerator(seed=seed)

    def generate(self, borrower: Sequence[str] | None = None) -> list[str]:
        """Generate one row in loan column order.

        Parameters
        ----------
        borrower : Sequence[str] | None
            A borrower row to reuse (existing borrower); a new borrower
            is generated when omitted.
        """
        if borrower is None:
            borrower = self._borrowers.generate()
        who = named_values(borrower, ImportKind.BORROWERS)

        issued = self.fake.date_between(start_date="-1y", end_date="today")
        amount = Decimal(random.randint(5, 200) * 1000)
        rate = Decimal(random.choice(self.RATES))
        unit, values = random.choices(self.PERIODS, weights=self.PERIOD_WEIGHTS, k=1)[0]
        period = random.choice(values)
        total_interest = compute_total_interest(amount, rate)

        status = LoanStatus.RUNNING if random.random() < 0.8 else LoanStatus.REPAID
        last_repayment = ""
        if status == LoanStatus.REPAID:
            principal_balance = interest_balance = Decimal(0)
            due = compute_due_date(issued, unit, period)
            last_repayment = min(due, date.today()).strftime(DATE_FORMAT)
        else:
            paid_share = Decimal(random.choice(["0", "0.25", "0.5"]))
            principal_balance = amount - (amount * paid_share).quantize(Decimal(1))
            interest_balance = total_interest - (total_interest * paid_share).quantize(
                Decimal("0.01")
            )
            if paid_share:
                last_repayment = (issued + timedelta(days=random.randint(1, 30))).strftime(
                    DATE_FORMAT
                )

        return [
            issued.strftime(DATE_FORMAT),
            str(amount),
            random.choice(self.settings.loan_types),
            unit.value,
            str(period),
            str(rate),
            status.value,
            str(principal_balance),
            str(interest_balance),
            who["name"],
            who["national_id"],
            who["mobile"],
            who["email"],
            who["employment_status"],
            last_repayment,
        ]

    def generate_invalid(self) -> list[str]:
        """Generate a loan row that breaks one validation rule."""
        row = self.generate()
        position, bad_value = random.choice(
            [
                (0, "15/01/2024"),
                (1, "-5000"),
                (2, "Unknown Loan"),
                (3, "years"),
                (4, "0"),
                (6, "overdue"),
                (13, "unemployed"),
            ]
        )
        row[position] = bad_value
        return row


class RepaymentRowGenerator(BaseGenerator):
    """Generate repayment rows against given loan numbers."""

    def __init__(self, settings: LedgerSettings, seed: int | None = None) -> None:
        super().__init__(seed)
        self.settings = settings

    def generate(self, loan_number: str, payer: Sequence[str]) -> list[str]:
        """Generate one row in repayment column order.

        Parameters
        ----------
        loan_number : str
            Loan the payment is made against.
        payer : Sequence[str]
            Borrower row of the payer.
        """
        who = named_values(payer, ImportKind.BORROWERS)
        principal = Decimal(random.randint(1, 50) * 500)
        interest = (principal * Decimal(random.choice(["0.1", "0.15"]))).quantize(Decimal(1))
        return [
            loan_number,
            self.fake.date_between(start_date="-180d", end_date="today").strftime(DATE_FORMAT),
            str(principal),
            str(interest),
            who["name"],
            who["national_id"],
            who["mobile"],
            random.choice(self.settings.payment_channels),
            random.choice(["", "Monthly payment", "Partial payment", "Final installment"]),
        ]


def write_import_file(
    path: str | Path,
    kind: ImportKind,
    rows: Sequence[Sequence[str]],
    delimiter: str = DEFAULT_DELIMITER,
) -> Path:
    """Write a header line and rows as an import file.

    Delimiters inside values are replaced by spaces since the format has
    no quoting.

    Returns
    -------
    Path
        The written file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [delimiter.join(headings(kind))]
    lines.extend(
        delimiter.join(str(value).replace(delimiter, " ") for value in row) for row in rows
    )
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
