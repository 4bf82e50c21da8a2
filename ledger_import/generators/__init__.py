"""Sample row generators for import files."""

from ledger_import.generators.rows import (
    BorrowerRowGenerator,
    LoanRowGenerator,
    RepaymentRowGenerator,
    write_import_file,
)

__all__ = [
    "BorrowerRowGenerator",
    "LoanRowGenerator",
    "RepaymentRowGenerator",
    "write_import_file",
]
