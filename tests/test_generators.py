"""Tests for sample row generators."""

from pathlib import Path

from ledger_import.generators import (
    BorrowerRowGenerator,
    LoanRowGenerator,
    RepaymentRowGenerator,
    write_import_file,
)
from ledger_import.importers import BatchCoordinator
from ledger_import.importers.validator import validate_row
from ledger_import.models.ledger import ImportKind, LedgerSettings
from ledger_import.store import LedgerRegistry


class TestBorrowerRowGenerator:
    """Tests for BorrowerRowGenerator."""

    def test_rows_valid(self, seed: int, settings: LedgerSettings) -> None:
        rows = list(BorrowerRowGenerator(seed=seed).generate_batch(20))

        assert len(rows) == 20
        assert all(validate_row(row, ImportKind.BORROWERS, settings) == [] for row in rows)

    def test_natural_keys_unique(self, seed: int) -> None:
        rows = list(BorrowerRowGenerator(seed=seed).generate_batch(50))

        assert len({row[1] for row in rows}) == 50
        assert len({row[2] for row in rows}) == 50

    def test_reproducible(self, seed: int) -> None:
        first = BorrowerRowGenerator(seed=seed).generate()
        second = BorrowerRowGenerator(seed=seed).generate()
        assert first == second


class TestLoanRowGenerator:
    """Tests for LoanRowGenerator."""

    def test_rows_valid(self, seed: int, settings: LedgerSettings) -> None:
        generator = LoanRowGenerator(settings, seed=seed)

        for _ in range(30):
            row = generator.generate()
            assert len(row) == 15
            assert validate_row(row, ImportKind.LOANS, settings) == []

    def test_reuses_given_borrower(self, seed: int, settings: LedgerSettings) -> None:
        borrower = BorrowerRowGenerator(seed=seed).generate()
        row = LoanRowGenerator(settings, seed=seed).generate(borrower)

        assert row[9:14] == borrower

    def test_invalid_rows_rejected(self, seed: int, settings: LedgerSettings) -> None:
        generator = LoanRowGenerator(settings, seed=seed)

        for _ in range(20):
            assert validate_row(generator.generate_invalid(), ImportKind.LOANS, settings) != []


class TestRepaymentRowGenerator:
    """Tests for RepaymentRowGenerator."""

    def test_rows_valid(self, seed: int, settings: LedgerSettings) -> None:
        payer = BorrowerRowGenerator(seed=seed).generate()
        row = RepaymentRowGenerator(settings, seed=seed).generate("Ln_00001A", payer)

        assert row[0] == "Ln_00001A"
        assert row[4:7] == payer[:3]
        assert validate_row(row, ImportKind.REPAYMENTS, settings) == []


class TestWriteImportFile:
    """Tests for write_import_file."""

    def test_generated_file_imports(
        self,
        seed: int,
        settings: LedgerSettings,
        registry: LedgerRegistry,
        tmp_path: Path,
    ) -> None:
        """Test that a generated loan file imports without errors."""
        generator = LoanRowGenerator(settings, seed=seed)
        rows = [generator.generate() for _ in range(10)]

        path = write_import_file(tmp_path / "out" / "loans.csv", ImportKind.LOANS, rows)
        result = BatchCoordinator(registry).run_file(path, ImportKind.LOANS)

        assert result.error_messages == []
        assert result.success_count == 10
        assert registry.settings.next_loan_number == 11

    def test_delimiter_in_value_replaced(self, tmp_path: Path) -> None:
        path = write_import_file(
            tmp_path / "b.csv",
            ImportKind.BORROWERS,
            [["Doe, John", "1", "07", "", "employed"]],
        )

        assert path.read_text().splitlines()[1] == "Doe  John,1,07,,employed"
