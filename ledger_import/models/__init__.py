"""Domain models for the loan ledger."""

from ledger_import.models.base import Event

__all__ = ["Event"]
