"""Loan number sequence and internal id sources."""

from __future__ import annotations

import itertools
from typing import Protocol

from faker import Faker

LOAN_NUMBER_DIGITS = 5


def format_loan_number(counter: int, prefix: str, suffix: str) -> str:
    """Format a loan number as ``prefix + zero-padded counter + suffix``.

    Counters wider than five digits are kept whole.

    Examples
    --------
    >>> format_loan_number(1, "Ln_", "A")
    'Ln_00001A'
    """
    if counter < 1:
        raise ValueError(f"Loan number counter must be positive, got {counter}")
    return f"{prefix}{counter:0{LOAN_NUMBER_DIGITS}d}{suffix}"


class LoanNumberSequence:
    """Batch-local running counter for loan numbers.

    The sequence starts from the registry counter at batch start and is
    only moved by :meth:`advance`, which the caller invokes after a loan
    has been committed.

    Parameters
    ----------
    start : int
        Counter value of the next loan number.
    prefix : str
        Loan number prefix (e.g. ``Ln_``).
    suffix : str
        Loan number suffix (e.g. ``A``).
    """

    def __init__(self, start: int, prefix: str, suffix: str) -> None:
        self.current = start
        self.prefix = prefix
        self.suffix = suffix
        self.issued = 0

    def peek(self) -> str:
        """Loan number for the current counter, without consuming it."""
        return format_loan_number(self.current, self.prefix, self.suffix)

    def advance(self) -> None:
        """Consume the current number."""
        self.current += 1
        self.issued += 1


class IdSource(Protocol):
    """Supplier of internal entity ids."""

    def next_id(self) -> str: ...


class SequentialIdSource:
    """Deterministic ids of the form ``<prefix>-000001``."""

    def __init__(self, prefix: str = "id", start: int = 1) -> None:
        self.prefix = prefix
        self._counter = itertools.count(start)

    def next_id(self) -> str:
        return f"{self.prefix}-{next(self._counter):06d}"


class FakerIdSource:
    """UUID4 ids from a Faker instance; reproducible when seeded.

    Parameters
    ----------
    seed : int | None
        Seed for the Faker instance. ``None`` gives fresh ids per run.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.fake = Faker()
        if seed is not None:
            self.fake.seed_instance(seed)

    def next_id(self) -> str:
        return self.fake.uuid4()
