"""Validation pipeline for a documentation set."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from sqldocs_check.checker import DOCUMENT_SECTION, check_text
from sqldocs_check.config import (
    SQLDOCS_CHECK_ENCODING,
    SQLDOCS_CHECK_OUTPUT_KEYWORDS,
    SQLDOCS_CHECK_PATTERN,
)
from sqldocs_check.file_utils import discover_documents, read_text_async
from sqldocs_check.output_formatter import build_report
from sqldocs_check.schemas import CheckResult, Failure, Report
from sqldocs_check.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ValidationOptions:
    """Options for a validation run.

    Attributes:
        pattern: Glob pattern selecting documents inside directories.
        output_keywords: Section label keywords that mark output tables.
        encoding: Encoding used to read documents.
    """

    pattern: str = SQLDOCS_CHECK_PATTERN
    output_keywords: tuple[str, ...] = field(
        default_factory=lambda: SQLDOCS_CHECK_OUTPUT_KEYWORDS
    )
    encoding: str = SQLDOCS_CHECK_ENCODING


def collect_documents(paths: Iterable[Path], options: ValidationOptions) -> list[Path]:
    """Expand input paths into documents, keeping input order and dropping repeats."""
    seen: set[Path] = set()
    documents: list[Path] = []
    for path in paths:
        for document in discover_documents(path, options.pattern):
            key = document.resolve()
            if key in seen:
                continue
            seen.add(key)
            documents.append(document)
    return documents


def check_file(path: Path, options: ValidationOptions | None = None) -> CheckResult:
    """Read and check a single document."""
    opts = options or ValidationOptions()
    try:
        text = path.read_text(encoding=opts.encoding)
    except UnicodeDecodeError as exc:
        return _read_failure(path, f"cannot decode as {opts.encoding}: {exc.reason}")
    except OSError as exc:
        return _read_failure(path, f"cannot read file: {exc.strerror or exc}")
    return check_text(text, identifier=str(path), output_keywords=opts.output_keywords)


def validate_paths(
    paths: Iterable[Path], options: ValidationOptions | None = None
) -> Report:
    """Check every document under the given paths, one after another.

    Raises:
        FileNotFoundError: If an input path does not exist.
    """
    opts = options or ValidationOptions()
    documents = collect_documents(paths, opts)
    report = build_report(check_file(path, opts) for path in documents)
    _log_summary(report)
    return report


async def validate_paths_async(
    paths: Iterable[Path], options: ValidationOptions | None = None
) -> Report:
    """Check every document under the given paths concurrently.

    Files are read in worker threads. Results keep input order and match
    those of validate_paths.

    Raises:
        FileNotFoundError: If an input path does not exist.
    """
    opts = options or ValidationOptions()
    documents = collect_documents(paths, opts)
    results = await asyncio.gather(*(_check_file_async(path, opts) for path in documents))
    report = build_report(results)
    _log_summary(report)
    return report


async def _check_file_async(path: Path, options: ValidationOptions) -> CheckResult:
    try:
        text = await read_text_async(path, encoding=options.encoding)
    except UnicodeDecodeError as exc:
        return _read_failure(path, f"cannot decode as {options.encoding}: {exc.reason}")
    except OSError as exc:
        return _read_failure(path, f"cannot read file: {exc.strerror or exc}")
    return check_text(text, identifier=str(path), output_keywords=options.output_keywords)


def _read_failure(path: Path, reason: str) -> CheckResult:
    logger.warning(
        "Failed to read document",
        extra={"path": str(path), "error": reason},
    )
    failure = Failure(section=DOCUMENT_SECTION, kind="ParseError", reason=reason)
    return CheckResult(document=str(path), failures=(failure,))


def _log_summary(report: Report) -> None:
    logger.info(
        "Checked documents",
        extra={"total": report.total, "failed": report.failed},
    )
