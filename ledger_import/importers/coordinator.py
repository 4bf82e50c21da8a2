"""Batch import of loans, repayments and borrowers into the registry."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable

from ledger_import.exceptions import DuplicateEntityError
from ledger_import.importers.calculations import derive_loan_terms
from ledger_import.importers.decoder import DecodedRow, decode_table, read_upload
from ledger_import.importers.identifiers import FakerIdSource, IdSource, LoanNumberSequence
from ledger_import.importers.resolver import BorrowerCandidate, BorrowerResolver
from ledger_import.importers.schema import (
    parse_borrower_row,
    parse_loan_row,
    parse_repayment_row,
)
from ledger_import.importers.validator import validate_row
from ledger_import.logging import batch_fields
from ledger_import.models.ledger import (
    ImportKind,
    LedgerSettings,
    Loan,
    PayerSnapshot,
    Repayment,
)
from ledger_import.store.ledger import LedgerRegistry

logger = logging.getLogger(__name__)

DUPLICATE_BORROWER_MESSAGE = "Borrower with this National ID or Mobile already exists"


@dataclass
class ImportResult:
    """Per-batch outcome reported back to the operator.

    ``error_messages`` holds one ``Row <n>: ...`` entry per rejected row,
    in file order.
    """

    kind: ImportKind
    success_count: int = 0
    error_messages: list[str] = field(default_factory=list)
    new_borrower_count: int = 0

    @property
    def has_errors(self) -> bool:
        return bool(self.error_messages)

    def add_error(self, row_index: int, messages: list[str]) -> None:
        self.error_messages.append(f"Row {row_index}: {', '.join(messages)}")

    def describe(self) -> str:
        """One-line summary, e.g. ``Successfully processed 3 loans and added 1 new borrowers``."""
        if self.success_count == 0:
            return f"No {self.kind.value} were imported"
        text = f"Successfully processed {self.success_count} {self.kind.value}"
        if self.new_borrower_count > 0:
            text += f" and added {self.new_borrower_count} new borrowers"
        return text


class BatchCoordinator:
    """Run decode, validate, resolve, calculate and commit over a batch.

    A failing row is reported in the result and never stops the batch.
    Only a malformed file (no header plus data) raises.

    Parameters
    ----------
    registry : LedgerRegistry
        Registry the batch commits into.
    id_source : IdSource | None
        Supplier of internal ids. Defaults to the registry's id source,
        then to unseeded UUIDs.
    clock : Callable[[], datetime] | None
        Time source for ``date_added``. Defaults to the registry clock.
    """

    def __init__(
        self,
        registry: LedgerRegistry,
        id_source: IdSource | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.registry = registry
        self.id_source = id_source or registry.id_source or FakerIdSource()
        self.clock = clock or registry.clock
        self.resolver = BorrowerResolver(registry, self.id_source, self.clock)

    def run_file(self, source: str | Path | bytes, kind: ImportKind) -> ImportResult:
        """Read an upload from disk (or raw bytes) and import it."""
        return self.run(read_upload(source), kind)

    def run(self, text: str, kind: ImportKind) -> ImportResult:
        """Import one batch of delimited text.

        Parameters
        ----------
        text : str
            Upload content: a header line followed by data lines.
        kind : ImportKind
            What the rows describe.

        Returns
        -------
        ImportResult
            Committed count, row errors and newly created borrowers.

        Raises
        ------
        FileFormatError
            If the text has fewer than two non-blank lines.
        """
        kind = ImportKind(kind)
        table = decode_table(text)
        result = ImportResult(kind=kind)
        t0 = time.perf_counter()

        with self.registry.exclusive():
            settings = self.registry.settings.snapshot()
            sequence = LoanNumberSequence(
                settings.next_loan_number,
                settings.loan_number_prefix,
                settings.loan_number_suffix,
            )
            logger.info(
                "Importing %d %s rows (%d header columns)",
                len(table.rows),
                kind.value,
                table.column_count,
                extra=batch_fields(kind.value, rows=len(table.rows)),
            )

            for row in table.rows:
                self._process_row(row, kind, settings, sequence, result)

            if kind == ImportKind.LOANS:
                self.registry.advance_loan_counter(sequence.current)

        logger.info(
            "%s import finished in %.2fs: committed=%d, rejected=%d, new_borrowers=%d",
            kind.value.capitalize(),
            time.perf_counter() - t0,
            result.success_count,
            len(result.error_messages),
            result.new_borrower_count,
            extra=batch_fields(
                kind.value,
                committed=result.success_count,
                rejected=len(result.error_messages),
                new_borrowers=result.new_borrower_count,
            ),
        )
        return result

    def _process_row(
        self,
        row: DecodedRow,
        kind: ImportKind,
        settings: LedgerSettings,
        sequence: LoanNumberSequence,
        result: ImportResult,
    ) -> None:
        violations = validate_row(row.values, kind, settings)
        if violations:
            logger.debug("Row %d rejected: %s", row.index, "; ".join(violations))
            result.add_error(row.index, violations)
            return

        try:
            if kind == ImportKind.LOANS:
                self._import_loan(row, sequence, result)
            elif kind == ImportKind.REPAYMENTS:
                self._import_repayment(row)
            else:
                self._import_borrower(row)
        except Exception as e:
            logger.warning("Row %d failed: %s", row.index, e)
            result.add_error(row.index, [str(e)])
            return

        result.success_count += 1

    def _import_loan(
        self, row: DecodedRow, sequence: LoanNumberSequence, result: ImportResult
    ) -> None:
        parsed = parse_loan_row(row.values)
        resolution = self.resolver.resolve_or_stage(
            BorrowerCandidate(
                name=parsed.borrower_name,
                national_id=parsed.national_id,
                mobile=parsed.mobile,
                email=parsed.email,
                employment_status=parsed.employment_status,
            )
        )
        borrower = resolution.borrower
        terms = derive_loan_terms(
            parsed.issuance_date,
            parsed.amount,
            parsed.interest_rate,
            parsed.repayment_unit,
            parsed.repayment_value,
        )

        loan = Loan(
            loan_id=self.id_source.next_id(),
            loan_number=sequence.peek(),
            borrower_id=borrower.borrower_id,
            issuance_date=parsed.issuance_date,
            amount=parsed.amount,
            loan_type=parsed.loan_type,
            repayment_unit=parsed.repayment_unit,
            repayment_value=parsed.repayment_value,
            interest_rate=parsed.interest_rate,
            total_interest=terms.total_interest,
            due_date=terms.due_date,
            expected_repayment=terms.expected_repayment,
            principal_balance=(
                parsed.principal_balance if parsed.principal_balance is not None else parsed.amount
            ),
            interest_balance=(
                parsed.interest_balance
                if parsed.interest_balance is not None
                else terms.total_interest
            ),
            status=parsed.status,
            borrower=borrower.snapshot(),
            last_repayment_date=parsed.last_repayment_date,
        )

        self.registry.add_loan(loan, staged_borrower=borrower if resolution.created else None)
        sequence.advance()
        if resolution.created:
            result.new_borrower_count += 1
        logger.debug("Row %d committed as loan %s", row.index, loan.loan_number)

    def _import_repayment(self, row: DecodedRow) -> None:
        parsed = parse_repayment_row(row.values)
        self.registry.add_repayment(
            Repayment(
                repayment_id=self.id_source.next_id(),
                loan_number=parsed.loan_number,
                payment_date=parsed.payment_date,
                principal_amount=parsed.principal_amount,
                interest_amount=parsed.interest_amount,
                payer=PayerSnapshot(
                    name=parsed.payer_name,
                    national_id=parsed.payer_national_id,
                    mobile=parsed.payer_mobile,
                ),
                payment_channel=parsed.payment_channel,
                notes=parsed.notes,
            )
        )

    def _import_borrower(self, row: DecodedRow) -> None:
        parsed = parse_borrower_row(row.values)
        if self.resolver.find_existing(parsed.national_id, parsed.mobile) is not None:
            raise DuplicateEntityError(DUPLICATE_BORROWER_MESSAGE)

        self.registry.add_borrower(
            self.resolver.build(
                BorrowerCandidate(
                    name=parsed.name,
                    national_id=parsed.national_id,
                    mobile=parsed.mobile,
                    email=parsed.email,
                    employment_status=parsed.employment_status,
                )
            )
        )
