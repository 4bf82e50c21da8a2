"""Bulk import and loan calculation engine for a small loan ledger."""

__version__ = "0.1.0"
