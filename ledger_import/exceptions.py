"""Custom exception hierarchy for ledger-import."""


class LedgerImportError(Exception):
    """Base exception for all ledger-import errors."""


class FileFormatError(LedgerImportError):
    """Raised when an upload cannot be decoded into a header and data rows."""


class RowParseError(LedgerImportError):
    """Raised when a row value cannot be converted to its typed field."""


class EntityNotFoundError(LedgerImportError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class DuplicateEntityError(LedgerImportError):
    """Raised when a natural key or loan number is already registered."""


class InvalidEntityStateError(LedgerImportError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(LedgerImportError):
    """Raised when configuration is invalid or missing."""


class SinkError(LedgerImportError):
    """Raised when an event sink operation fails."""
