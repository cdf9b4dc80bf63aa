"""sqldocs-check: consistency checks for SQL clause documentation."""

from sqldocs_check.checker import check_document, check_text
from sqldocs_check.exceptions import (
    ConsistencyError,
    ParseError,
    SqlDocsError,
    SqlSyntaxError,
    TableFormatError,
)
from sqldocs_check.markdown_parser import parse_document
from sqldocs_check.output_formatter import build_report, format_report
from sqldocs_check.schemas import CheckResult, Document, Report, Table
from sqldocs_check.tables import format_markdown_table, parse_markdown_table
from sqldocs_check.validation import ValidationOptions, validate_paths, validate_paths_async

__all__ = [
    "CheckResult",
    "ConsistencyError",
    "Document",
    "ParseError",
    "Report",
    "SqlDocsError",
    "SqlSyntaxError",
    "Table",
    "TableFormatError",
    "ValidationOptions",
    "build_report",
    "check_document",
    "check_text",
    "format_markdown_table",
    "format_report",
    "parse_document",
    "parse_markdown_table",
    "validate_paths",
    "validate_paths_async",
]
