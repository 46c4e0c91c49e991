from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, resolve_config
from ..excel.reader import preview_rows, sheet_names
from ..excel.source import SourceError
from ..logging.init import log_summary, set_debug, setup_logging
from ..services.orchestrator import run_scan
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Validate the single required argument (data file path)
- Load .env, then the optional YAML config; command line flags win
- --inspect: print sheet names and the first rows, then exit
- Otherwise scan the file, logging each prime as found, then a SUMMARY line

Exit codes: 0 success, 1 fatal (config / file cannot be opened or read),
2 invalid arguments.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_USAGE = 2

INSPECT_ROWS = 5


def _load_env_file(path: Path) -> None:
    """Load .env via python-dotenv; existing environment variables win."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="prime-scanner",
        description="Stream a spreadsheet column and report the prime numbers in it",
    )
    p.add_argument("file", help="Path to the .xlsx or .csv data file")
    p.add_argument("--sheet", type=int, default=None, help="Zero-based sheet index (default 0)")
    p.add_argument("--column", type=int, default=None, help="Zero-based column index (default 1 = column B)")
    p.add_argument("--header-rows", type=int, default=None, help="Leading rows to skip by index (default 0)")
    p.add_argument("--max-primes", type=int, default=None, help="Stop after this many primes")
    p.add_argument("--config", type=Path, default=None, help="YAML config file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging (per-row diagnostics)")
    p.add_argument("--inspect", action="store_true", help="Print sheet names & first rows then exit")
    return p.parse_args(argv)


def _inspect_data(path: Path, sheet_index: int) -> int:
    names = sheet_names(path)
    print(f"FILE: {path.name} sheets={names}")
    rows = preview_rows(path, sheet_index, nrows=INSPECT_ROWS)
    sheet = names[sheet_index] if sheet_index < len(names) else sheet_index
    print(f"  SHEET: {sheet}")
    for i, r in enumerate(rows):
        # datetime 等は isoformat で表示
        print(f"    row {i}: {[v.isoformat() if hasattr(v, 'isoformat') else v for v in r]}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] は「引数なし」として扱う)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    if not args.file.strip():
        logger.error("Invalid arguments were given")
        return EXIT_USAGE

    _load_env_file(Path(".env"))
    try:
        cfg = resolve_config(args.config).with_overrides(
            sheet_index=args.sheet,
            column_index=args.column,
            header_rows=args.header_rows,
            max_primes=args.max_primes,
        )
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")
    if cfg.source is not None:
        logger.debug(f"config loaded from {cfg.source}")

    path = Path(args.file)
    try:
        if args.inspect:
            return _inspect_data(path, cfg.scan.sheet_index)
        summary = run_scan(path, cfg)
    except SourceError as e:
        logger.error(f"source: {e}")
        return EXIT_FATAL

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(summary)[len("SUMMARY "):])
    return EXIT_SUCCESS
