"""Custom exceptions for sqldocs-check."""

from __future__ import annotations


class SqlDocsError(Exception):
    """Base exception for sqldocs-check operations.

    Attributes:
        section: Label of the document section the error refers to, if any.
        line: 1-based line number in the source document, if known.
    """

    def __init__(
        self, message: str, *, section: str | None = None, line: int | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.section = section
        self.line = line


class ParseError(SqlDocsError):
    """Malformed document structure (unterminated block, missing separator)."""


class TableFormatError(SqlDocsError):
    """Table rows and columns disagree."""


class ConsistencyError(SqlDocsError):
    """Output table shape disagrees with its query."""


class SqlSyntaxError(ConsistencyError):
    """Query block is not well-formed SQL."""
