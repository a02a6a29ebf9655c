"""
wordtally - Command-line entry point

Dem word frequencies tren nhieu files song song va in bang ket qua.

Usage:
    wordtally [--alpha | --sort MODE] [--top N] [--min-length N]
              [--exclude PATTERN]... [--save-defaults] [--debug] PATH...

Exit codes:
- 0: Report da duoc in (ke ca khi mot so files loi, xem log)
- 0: --save-defaults khong kem PATH (chi luu defaults)
- 2: Khong co PATH, --help, hoac argument khong hop le
"""

import argparse
import dataclasses
import sys
from typing import List, Optional

from config.app_settings import VALID_SORT_MODES, AppSettings
from core.counting.aggregator import ConcurrentAggregator
from core.counting.file_scanner import FileScanner
from core.ignore_engine import collect_input_files
from core.logging_config import flush_logs, log_info, log_warning, set_debug_mode
from core.reporter import print_report
from services.settings_manager import load_app_settings, save_app_settings

EXIT_OK = 0
EXIT_USAGE = 2


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordtally",
        description="Count word occurrences across text files, concurrently.",
        add_help=False,
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="files or directories")
    parser.add_argument("-h", "--help", action="store_true", help="show this help")

    order = parser.add_mutually_exclusive_group()
    order.add_argument(
        "-a",
        "--alpha",
        dest="sort_mode",
        action="store_const",
        const="alphabetical",
        help="sort report alphabetically",
    )
    order.add_argument("-s", "--sort", dest="sort_mode", choices=VALID_SORT_MODES)

    parser.add_argument(
        "-n", "--top", type=_non_negative_int, help="only print the N first rows"
    )
    parser.add_argument(
        "-m", "--min-length", type=int, help="minimum word length (default 2)"
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="gitignore-style pattern skipped inside directories (repeatable)",
    )
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="store sort mode, min length and excludes in ~/.wordtally/settings.json",
    )
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser


def _save_defaults(
    settings: AppSettings, sort_mode: str, min_length: int, excludes: List[str]
) -> None:
    """Luu lua chon hien tai lam defaults; excludes moi duoc noi them vao list cu."""
    patterns = settings.get_excluded_patterns_list()
    patterns += [p for p in excludes if p not in patterns]
    updated = dataclasses.replace(
        settings,
        sort_mode=sort_mode,
        min_word_length=min_length,
        excluded_patterns="\n".join(patterns),
    )
    if save_app_settings(updated):
        log_info("Saved defaults to settings.json")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.help or not (args.paths or args.save_defaults):
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    if args.debug:
        set_debug_mode(True)

    settings: AppSettings = load_app_settings()
    sort_mode = args.sort_mode or settings.sort_mode
    min_length = settings.min_word_length if args.min_length is None else args.min_length
    if min_length < 1:
        parser.print_usage(sys.stderr)
        sys.stderr.write("wordtally: error: --min-length must be >= 1\n")
        return EXIT_USAGE

    try:
        if args.save_defaults:
            _save_defaults(settings, sort_mode, min_length, args.exclude)
            if not args.paths:
                return EXIT_OK

        files = collect_input_files(
            args.paths,
            excluded_patterns=settings.get_excluded_patterns_list() + args.exclude,
            use_default_ignores=settings.use_default_ignores,
        )
        if not files:
            log_warning("No input files after expanding directories")

        aggregator = ConcurrentAggregator(
            files,
            scanner=FileScanner(min_length=min_length, encoding=settings.encoding),
            capacity=settings.channel_capacity,
            max_workers=settings.max_workers,
        )
        table = aggregator.run()
        print_report(table, sort_mode, top=args.top)
        log_info(f"Reported {len(table)} words from {len(files)} files")
    finally:
        flush_logs()
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
