"""
Command line re-indenter for RASI theme files.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

# Allow running the file directly (e.g. `python rasimode/main.py`) by
# ensuring the repository root is on sys.path before importing the package.
if __package__ in {None, ""}:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from rasimode.core.config import ConfigManager
from rasimode.core.logging import LOG_FILE, configure_logging, get_logger
from rasimode.indent import reindent_region

EXIT_OK = 0
EXIT_CHANGED = 1
EXIT_ERROR = 2


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {number}")
    return number


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="rasimode", description="Re-indent rofi RASI theme files")
    parser.add_argument("files", nargs="+", type=Path, help="RASI files to re-indent")
    parser.add_argument("--indent-unit", type=_positive_int, help="Columns per nesting level")
    parser.add_argument("--settings", type=Path, help="Settings file overriding the user settings")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-i", "--in-place", action="store_true", help="Rewrite files instead of printing them")
    mode.add_argument("--check", action="store_true", help="Only report files that would change")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    config = ConfigManager(args.settings)

    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level(), logging.WARNING)
    log_file = LOG_FILE if config.get("logging", {}).get("file") else None
    configure_logging(level, log_file)
    logger = get_logger(__name__)

    indent_unit = args.indent_unit or config.indent_unit()
    syntax = config.lexical_syntax()
    status = EXIT_OK

    for path in args.files:
        try:
            # Bytes keep CRLF line endings intact.
            original = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Cannot read %s: %s", path, exc)
            status = EXIT_ERROR
            continue

        updated = reindent_region(original, indent_unit, syntax=syntax)

        if args.check:
            if updated != original:
                print(f"would re-indent {path}")
                status = max(status, EXIT_CHANGED)
        elif args.in_place:
            if updated != original:
                try:
                    path.write_bytes(updated.encode("utf-8"))
                except OSError as exc:
                    logger.error("Cannot write %s: %s", path, exc)
                    status = EXIT_ERROR
                    continue
                logger.info("Re-indented %s", path)
        else:
            sys.stdout.write(updated)

    return status


if __name__ == "__main__":
    raise SystemExit(main())
