"""Issue a single loan to a registered borrower."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from ledger_import.exceptions import EntityNotFoundError, InvalidEntityStateError
from ledger_import.importers.calculations import derive_loan_terms
from ledger_import.importers.identifiers import FakerIdSource, IdSource, format_loan_number
from ledger_import.models.ledger import Loan, LoanStatus, RepaymentUnit
from ledger_import.store.ledger import LedgerRegistry

logger = logging.getLogger(__name__)


def issue_loan(
    registry: LedgerRegistry,
    borrower_id: str,
    amount: Decimal,
    loan_type: str,
    repayment_unit: RepaymentUnit,
    repayment_value: int,
    issuance_date: date,
    interest_rate: Decimal | None = None,
    id_source: IdSource | None = None,
) -> Loan:
    """Issue a running loan with full balances and the next loan number.

    Parameters
    ----------
    registry : LedgerRegistry
        Registry holding the borrower; receives the loan.
    borrower_id : str
        Registered borrower receiving the loan.
    amount : Decimal
        Principal, must be positive.
    loan_type : str
        One of ``registry.settings.loan_types``.
    repayment_unit : RepaymentUnit
        Period unit.
    repayment_value : int
        Number of period units.
    issuance_date : date
        Date of issuance.
    interest_rate : Decimal | None
        Flat rate in percent; ``settings.default_interest_rate`` when omitted.
    id_source : IdSource | None
        Supplier of the loan id.

    Returns
    -------
    Loan
        The committed loan.
    """
    id_source = id_source or registry.id_source or FakerIdSource()

    if amount <= 0:
        raise InvalidEntityStateError(f"Loan amount must be positive, got {amount}")

    with registry.exclusive():
        settings = registry.settings
        borrower = registry.get_borrower(borrower_id)
        if borrower is None:
            raise EntityNotFoundError(f"Borrower {borrower_id} not found")
        if loan_type not in settings.loan_types:
            raise InvalidEntityStateError(
                f"Loan type must be one of: {', '.join(settings.loan_types)}"
            )

        rate = settings.default_interest_rate if interest_rate is None else interest_rate
        if rate < 0:
            raise InvalidEntityStateError(f"Interest rate must be non-negative, got {rate}")

        repayment_unit = RepaymentUnit(repayment_unit)
        terms = derive_loan_terms(issuance_date, amount, rate, repayment_unit, repayment_value)
        counter = settings.next_loan_number

        loan = Loan(
            loan_id=id_source.next_id(),
            loan_number=format_loan_number(
                counter, settings.loan_number_prefix, settings.loan_number_suffix
            ),
            borrower_id=borrower.borrower_id,
            issuance_date=issuance_date,
            amount=amount,
            loan_type=loan_type,
            repayment_unit=repayment_unit,
            repayment_value=repayment_value,
            interest_rate=rate,
            total_interest=terms.total_interest,
            due_date=terms.due_date,
            expected_repayment=terms.expected_repayment,
            principal_balance=amount,
            interest_balance=terms.total_interest,
            status=LoanStatus.RUNNING,
            borrower=borrower.snapshot(),
        )
        registry.add_loan(loan)
        registry.advance_loan_counter(counter + 1)

    logger.info("Issued loan %s to borrower %s", loan.loan_number, borrower_id)
    return loan
