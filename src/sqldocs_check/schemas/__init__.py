"""Shared schemas for sqldocs-check."""

from sqldocs_check.schemas.document import Document, QuerySection, Section, TableSection
from sqldocs_check.schemas.report import CheckResult, Failure, Report
from sqldocs_check.schemas.table import Table

__all__ = [
    "CheckResult",
    "Document",
    "Failure",
    "QuerySection",
    "Report",
    "Section",
    "Table",
    "TableSection",
]
