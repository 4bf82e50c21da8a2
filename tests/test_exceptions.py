"""Tests for custom exception hierarchy."""

from ledger_import.exceptions import (
    ConfigurationError,
    DuplicateEntityError,
    EntityNotFoundError,
    FileFormatError,
    InvalidEntityStateError,
    LedgerImportError,
    ReferentialIntegrityError,
    RowParseError,
    SinkError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_base_error_is_exception(self) -> None:
        assert isinstance(LedgerImportError("test"), Exception)

    def test_file_format_error_is_base_error(self) -> None:
        assert isinstance(FileFormatError("test"), LedgerImportError)

    def test_row_parse_error_is_base_error(self) -> None:
        assert isinstance(RowParseError("test"), LedgerImportError)

    def test_referential_integrity_is_entity_not_found(self) -> None:
        err = ReferentialIntegrityError("test")
        assert isinstance(err, EntityNotFoundError)
        assert isinstance(err, LedgerImportError)

    def test_duplicate_entity_is_base_error(self) -> None:
        assert isinstance(DuplicateEntityError("test"), LedgerImportError)

    def test_invalid_entity_state_is_base_error(self) -> None:
        assert isinstance(InvalidEntityStateError("test"), LedgerImportError)

    def test_configuration_error_is_base_error(self) -> None:
        assert isinstance(ConfigurationError("test"), LedgerImportError)

    def test_sink_error_is_base_error(self) -> None:
        assert isinstance(SinkError("test"), LedgerImportError)

    def test_exception_message(self) -> None:
        err = ReferentialIntegrityError("Borrower id-000001 not found")
        assert str(err) == "Borrower id-000001 not found"
