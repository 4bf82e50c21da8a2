"""Enumeration types for ledger entities.

Values match the literal spellings used in import files.
"""

from enum import Enum


class EmploymentStatus(str, Enum):
    EMPLOYED = "employed"
    SELF_EMPLOYED = "self-employed"


class RepaymentUnit(str, Enum):
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


class LoanStatus(str, Enum):
    RUNNING = "running"
    REPAID = "repaid"


class ImportKind(str, Enum):
    LOANS = "loans"
    REPAYMENTS = "repayments"
    BORROWERS = "borrowers"
