#!/usr/bin/env python3
"""Import borrower, loan and repayment files into a fresh ledger.

Files are processed in dependency order (borrowers, loans, repayments)
against one registry, so loans can reuse imported borrowers. Each
batch prints its summary and row errors; committed entities can be
published to the console, JSON Lines files or Kafka.

Usage::

    python scripts/import_batch.py --loans loans.csv --repayments repayments.csv
    python scripts/import_batch.py --borrowers borrowers.csv --sink json
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ledger_import.config import EVENT_SINKS, LedgerConfig
from ledger_import.exceptions import FileFormatError, LedgerImportError
from ledger_import.importers import BatchCoordinator, FakerIdSource
from ledger_import.logging import setup_logging
from ledger_import.models.ledger import ImportKind
from ledger_import.sinks import create_sink
from ledger_import.store import LedgerRegistry

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.split("\n\n")[0])
    parser.add_argument("--borrowers", type=Path, help="Borrower import file")
    parser.add_argument("--loans", type=Path, help="Loan import file")
    parser.add_argument("--repayments", type=Path, help="Repayment import file")
    parser.add_argument(
        "--sink",
        choices=EVENT_SINKS,
        default=None,
        help="Where to publish ledger events (default: EVENT_SINK or none)",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--log-format", choices=["standard", "json"], default="standard")
    args = parser.parse_args(argv)

    if not (args.borrowers or args.loans or args.repayments):
        parser.error("at least one of --borrowers, --loans or --repayments is required")
    return args


def print_result(path: Path, result) -> None:
    print(f"\n{path}: {result.describe()}")
    if result.has_errors:
        print(f"Errors ({len(result.error_messages)}):")
        for message in result.error_messages:
            print(f"  {message}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        config = LedgerConfig.from_env()
        if args.sink:
            config.event_sink = args.sink
    except LedgerImportError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    setup_logging(level=args.log_level or config.log_level, format_type=args.log_format)

    sink = create_sink(config)
    registry = LedgerRegistry(
        settings=config.settings,
        channel=sink,
        id_source=FakerIdSource(config.seed),
    )
    coordinator = BatchCoordinator(registry)

    batches = [
        (ImportKind.BORROWERS, args.borrowers),
        (ImportKind.LOANS, args.loans),
        (ImportKind.REPAYMENTS, args.repayments),
    ]

    failed = False
    try:
        for kind, path in batches:
            if path is None:
                continue
            try:
                result = coordinator.run_file(path, kind)
            except FileFormatError as e:
                print(f"\n{path}: File processing error: {e}")
                failed = True
                continue
            print_result(path, result)
    finally:
        if sink is not None:
            sink.close()

    summary = registry.summary()
    print(
        f"\nLedger: {summary['borrowers']} borrowers, {summary['loans']} loans, "
        f"{summary['repayments']} repayments, next loan number {summary['next_loan_number']}"
    )
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
