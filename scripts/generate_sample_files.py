#!/usr/bin/env python3
"""Generate sample import files for manual validation.

Writes ``borrowers.csv``, ``loans.csv`` and ``repayments.csv`` into the
output folder. Some loans reuse the generated borrowers so that an
import exercises borrower matching; ``--invalid-rate`` mixes in rows
that fail validation.
"""

import argparse
import random
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ledger_import.config import LedgerConfig
from ledger_import.generators import (
    BorrowerRowGenerator,
    LoanRowGenerator,
    RepaymentRowGenerator,
    write_import_file,
)
from ledger_import.importers.identifiers import format_loan_number
from ledger_import.models.ledger import ImportKind


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate sample import files")
    parser.add_argument("--count", type=int, default=20, help="Number of loan rows")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument(
        "--invalid-rate", type=float, default=0.0, help="Share of invalid loan rows (0.0-1.0)"
    )
    parser.add_argument("--output-dir", type=Path, default=Path("local"), help="Output folder")
    args = parser.parse_args()

    settings = LedgerConfig.from_env().settings
    borrower_gen = BorrowerRowGenerator(seed=args.seed)
    loan_gen = LoanRowGenerator(settings, seed=args.seed)
    repayment_gen = RepaymentRowGenerator(settings, seed=args.seed)

    print(f"Generating sample files in {args.output_dir} (seed={args.seed})")

    # 1. Borrowers, half of which later receive loans
    borrowers = list(borrower_gen.generate_batch(max(1, args.count // 2)))
    path = write_import_file(args.output_dir / "borrowers.csv", ImportKind.BORROWERS, borrowers)
    print(f"Saved {len(borrowers)} borrowers to {path}")

    # 2. Loans
    loans = []
    payers = []
    for _ in range(args.count):
        if random.random() < args.invalid_rate:
            loans.append(loan_gen.generate_invalid())
            continue
        borrower = random.choice(borrowers) if random.random() < 0.5 else None
        row = loan_gen.generate(borrower)
        loans.append(row)
        payers.append(row[9:14])
    path = write_import_file(args.output_dir / "loans.csv", ImportKind.LOANS, loans)
    print(f"Saved {len(loans)} loans to {path}")

    # 3. Repayments against the numbers valid loans will receive
    repayments = []
    for offset, payer in enumerate(payers):
        loan_number = format_loan_number(
            settings.next_loan_number + offset,
            settings.loan_number_prefix,
            settings.loan_number_suffix,
        )
        for _ in range(random.randint(0, 2)):
            repayments.append(repayment_gen.generate(loan_number, payer))
    path = write_import_file(args.output_dir / "repayments.csv", ImportKind.REPAYMENTS, repayments)
    print(f"Saved {len(repayments)} repayments to {path}")


if __name__ == "__main__":
    main()
