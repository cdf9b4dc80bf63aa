"""Command line entry point for sqldocs-check."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from sqldocs_check.config import (
    SQLDOCS_CHECK_FORMAT,
    SQLDOCS_CHECK_OUTPUT_KEYWORDS,
    SQLDOCS_CHECK_PATTERN,
)
from sqldocs_check.file_utils import write_text_async
from sqldocs_check.output_formatter import format_report
from sqldocs_check.schemas import Report
from sqldocs_check.utils.logging_config import configure_logging, get_logger
from sqldocs_check.validation import ValidationOptions, validate_paths, validate_paths_async

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2

REPORT_FORMATS = ("text", "json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqldocs-check",
        description="Check SQL documentation pages for query/output table consistency.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Markdown files or directories to check (default: current directory)",
    )
    parser.add_argument(
        "--format",
        choices=REPORT_FORMATS,
        default=SQLDOCS_CHECK_FORMAT,
        help="Report format (default: %(default)s)",
    )
    parser.add_argument("--output", help="Write the report to this file instead of stdout")
    parser.add_argument(
        "--pattern",
        default=SQLDOCS_CHECK_PATTERN,
        help="Glob for documents inside directories (default: %(default)s)",
    )
    parser.add_argument(
        "--output-keyword",
        action="append",
        dest="output_keywords",
        metavar="WORD",
        help="Heading keyword marking output tables; repeatable "
        f"(default: {', '.join(SQLDOCS_CHECK_OUTPUT_KEYWORDS)})",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Check documents one at a time instead of concurrently",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.format not in REPORT_FORMATS:
        print(f"sqldocs-check: error: unsupported report format {args.format!r}", file=sys.stderr)
        return EXIT_USAGE

    if args.verbose:
        configure_logging("DEBUG" if args.verbose > 1 else "INFO")
    else:
        configure_logging()

    options = ValidationOptions(pattern=args.pattern)
    if args.output_keywords:
        options.output_keywords = tuple(word.lower() for word in args.output_keywords)
    paths = [Path(p) for p in args.paths]
    output = Path(args.output) if args.output else None

    try:
        if args.sequential:
            report = validate_paths(paths, options)
            rendered = format_report(report, fmt=args.format)
            if output:
                output.write_text(rendered + "\n", encoding="utf-8")
        else:
            report, rendered = asyncio.run(_run(paths, options, fmt=args.format, output=output))
    except FileNotFoundError as exc:
        print(f"sqldocs-check: error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    logger.info("Report rendered", extra={"report_format": args.format, "failed": report.failed})
    if output is None:
        print(rendered)
    return EXIT_OK if report.passed else EXIT_FAILED


async def _run(
    paths: list[Path],
    options: ValidationOptions,
    *,
    fmt: str,
    output: Path | None,
) -> tuple[Report, str]:
    report = await validate_paths_async(paths, options)
    rendered = format_report(report, fmt=fmt)
    if output:
        await write_text_async(output, rendered + "\n")
    return report, rendered
