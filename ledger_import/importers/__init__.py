"""Bulk import engine: decode, validate, resolve, calculate, commit."""

from ledger_import.importers.coordinator import BatchCoordinator, ImportResult
from ledger_import.importers.decoder import DecodedRow, DecodedTable, decode_table, read_upload
from ledger_import.importers.identifiers import (
    FakerIdSource,
    IdSource,
    LoanNumberSequence,
    SequentialIdSource,
    format_loan_number,
)
from ledger_import.importers.resolver import BorrowerCandidate, BorrowerResolver, Resolution
from ledger_import.importers.validator import validate_row

__all__ = [
    "BatchCoordinator",
    "BorrowerCandidate",
    "BorrowerResolver",
    "DecodedRow",
    "DecodedTable",
    "FakerIdSource",
    "IdSource",
    "ImportResult",
    "LoanNumberSequence",
    "Resolution",
    "SequentialIdSource",
    "decode_table",
    "format_loan_number",
    "read_upload",
    "validate_row",
]
