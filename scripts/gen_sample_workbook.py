#!/usr/bin/env python3
"""Sample workbook generator for prime-scanner.

Generates an .xlsx (or .csv) file with a header row and a mixed "Number"
column, for manual runs and streaming performance checks:
- Column A: 1-based index
- Column B: mostly positive integers, plus digit strings, negatives,
  decimals, placeholders ("N/A") and blanks

The number of primes the scanner should report is printed after writing.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from prime_scanner.services.primality import is_prime

HEADER = ["Index", "Number"]

# 値の種類ごとの出現比率 (合計 1.0)
VALUE_MIX = {
    "int": 0.70,
    "text": 0.10,
    "negative": 0.05,
    "decimal": 0.05,
    "placeholder": 0.05,
    "blank": 0.05,
}


def generate_values(rows: int, max_value: int = 100_000, seed: int = 42) -> tuple[list[Any], int]:
    """Generate the Number column and the count of primes a scan must find.

    Args:
        rows: Number of data rows
        max_value: Upper bound (inclusive) for generated integers
        seed: Random seed for reproducible data

    Returns:
        (values, expected_primes)
    """
    rng = np.random.default_rng(seed)
    kinds = rng.choice(list(VALUE_MIX), size=rows, p=list(VALUE_MIX.values()))
    numbers = rng.integers(1, max_value, size=rows, endpoint=True)

    values: list[Any] = []
    expected = 0
    for kind, raw in zip(kinds, numbers):
        n = int(raw)
        if kind == "int":
            values.append(n)
            expected += is_prime(n)
        elif kind == "text":
            values.append(str(n))
            expected += is_prime(n)
        elif kind == "negative":
            values.append(-n)
        elif kind == "decimal":
            values.append(n + 0.5)
        elif kind == "placeholder":
            values.append("N/A")
        else:
            values.append(None)
    return values, expected


def create_sample_file(
    output_path: Path,
    rows: int,
    max_value: int = 100_000,
    sheet: str = "Numbers",
    seed: int = 42,
) -> int:
    """Write the sample file and return the expected prime count."""
    values, expected = generate_values(rows, max_value, seed)
    df = pd.DataFrame({HEADER[0]: range(1, rows + 1), HEADER[1]: pd.Series(values, dtype=object)})

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() == ".csv":
        df.to_csv(output_path, index=False)
    else:
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet, index=False)
    return expected


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate a sample workbook with a mixed number column",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 50k rows into an .xlsx file
  %(prog)s data/sample.xlsx

  # CSV with small numbers (more primes per row)
  %(prog)s data/sample.csv --rows 10000 --max-value 1000
        """,
    )
    parser.add_argument("output", type=Path, help="Output .xlsx / .csv path")
    parser.add_argument("--rows", type=int, default=50_000, help="Number of data rows (default: 50,000)")
    parser.add_argument("--max-value", type=int, default=100_000, help="Largest generated integer (default: 100,000)")
    parser.add_argument("--sheet", default="Numbers", help="Sheet name for .xlsx output (default: Numbers)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args(argv)

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if args.max_value <= 1:
        print("Error: --max-value must be greater than 1", file=sys.stderr)
        return 1
    if args.output.suffix.lower() not in {".xlsx", ".csv"}:
        print("Error: output must be .xlsx or .csv", file=sys.stderr)
        return 1

    try:
        expected = create_sample_file(args.output, args.rows, args.max_value, args.sheet, args.seed)
    except OSError as e:
        print(f"Error generating sample file: {e}", file=sys.stderr)
        return 1

    print(f"Created sample file: {args.output}")
    print(f"  Rows: {args.rows:,} (+ 1 header row)")
    print(f"  Expected primes: {expected:,}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
