"""Cross-check query blocks against their declared output tables."""

from __future__ import annotations

from typing import Iterable

from sqldocs_check.config import SQLDOCS_CHECK_OUTPUT_KEYWORDS
from sqldocs_check.exceptions import (
    ConsistencyError,
    ParseError,
    SqlDocsError,
    SqlSyntaxError,
    TableFormatError,
)
from sqldocs_check.markdown_parser import parse_document
from sqldocs_check.schemas import CheckResult, Document, Failure, QuerySection, TableSection
from sqldocs_check.sql_utils import SelectList, check_sql_syntax, extract_select_list
from sqldocs_check.utils.logging_config import get_logger

logger = get_logger(__name__)

DOCUMENT_SECTION = "(document)"


def is_output_label(label: str, keywords: Iterable[str] = SQLDOCS_CHECK_OUTPUT_KEYWORDS) -> bool:
    """Check if a section label marks its table as query output."""
    lowered = label.lower()
    return any(keyword in lowered for keyword in keywords)


def check_document(
    document: Document,
    *,
    output_keywords: Iterable[str] | None = None,
) -> CheckResult:
    """Check every output table of a document against its preceding query.

    Query blocks are also syntax-checked. Tables whose label does not mark
    them as output (sample data, "before" tables) are not compared.

    Args:
        document: The parsed document.
        output_keywords: Label keywords marking output tables. Defaults to
            the configured keywords.

    Returns:
        CheckResult with every failure found in the document.
    """
    keywords = tuple(k.lower() for k in (output_keywords or SQLDOCS_CHECK_OUTPUT_KEYWORDS))
    errors: list[SqlDocsError] = []
    warnings: list[str] = []

    query: QuerySection | None = None
    select_list: SelectList | None = None
    query_broken = False

    for section in document.sections:
        if isinstance(section, QuerySection):
            query = section
            select_list = None
            query_broken = False
            try:
                check_sql_syntax(section.sql)
                select_list = extract_select_list(section.sql)
            except SqlSyntaxError as exc:
                query_broken = True
                errors.append(SqlSyntaxError(exc.message, section=section.label, line=section.line))
            continue

        if not is_output_label(section.label, keywords):
            continue

        where = f"{section.label} (line {section.line})"
        if query is None:
            errors.append(
                ConsistencyError(
                    "output table has no preceding query",
                    section=section.label,
                    line=section.line,
                )
            )
        elif query_broken:
            warnings.append(f"{where}: preceding query is malformed, column count not checked")
        elif select_list is None:
            warnings.append(f"{where}: preceding query has no SELECT, column count not checked")
        elif select_list.has_star:
            warnings.append(f"{where}: SELECT * cannot be counted")
        else:
            mismatch = _column_mismatch(section, select_list)
            if mismatch:
                errors.append(mismatch)

    result = CheckResult(
        document=document.identifier,
        failures=tuple(_to_failure(exc) for exc in errors),
        warnings=tuple(warnings),
    )
    logger.debug(
        "Checked document",
        extra={"identifier": document.identifier, "failures": len(result.failures)},
    )
    return result


def check_text(
    text: str,
    *,
    identifier: str,
    output_keywords: Iterable[str] | None = None,
) -> CheckResult:
    """Parse and check a document, reporting structural errors as failures."""
    try:
        document = parse_document(text, identifier=identifier)
    except (ParseError, TableFormatError) as exc:
        logger.debug(
            "Document failed to parse",
            extra={"identifier": identifier, "error": exc.message},
        )
        return CheckResult(document=identifier, failures=(_to_failure(exc),))
    return check_document(document, output_keywords=output_keywords)


def _column_mismatch(section: TableSection, select_list: SelectList) -> ConsistencyError | None:
    columns = section.table.column_count
    if columns == select_list.count:
        return None
    return ConsistencyError(
        f"output table has {columns} column{'s' if columns != 1 else ''} "
        f"but query selects {select_list.count} "
        f"expression{'s' if select_list.count != 1 else ''}",
        section=section.label,
        line=section.line,
    )


def _to_failure(exc: SqlDocsError) -> Failure:
    return Failure(
        section=exc.section or DOCUMENT_SECTION,
        kind=type(exc).__name__,
        reason=exc.message,
        line=exc.line,
    )
