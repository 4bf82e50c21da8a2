"""In-memory registry holding the ledger's entities."""

from ledger_import.store.ledger import LedgerRegistry

__all__ = ["LedgerRegistry"]
