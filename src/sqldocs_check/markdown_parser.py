"""Parse a Markdown topic page into a Document."""

from __future__ import annotations

import re

from sqldocs_check.exceptions import ParseError
from sqldocs_check.schemas import Document, QuerySection, Section, TableSection
from sqldocs_check.tables import (
    continues_table,
    is_separator_row,
    parse_html_table,
    parse_markdown_table,
    starts_table,
)
from sqldocs_check.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_SECTION_LABEL = "Introduction"

_HEADING_RE = re.compile(r"^\s{0,3}(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
_FENCE_RE = re.compile(r"^\s{0,3}(`{3,}|~{3,})\s*([^\s`]*)")
_HTML_TABLE_START_RE = re.compile(r"^\s*<table\b", re.IGNORECASE)
_HTML_TABLE_END_RE = re.compile(r"</table\s*>", re.IGNORECASE)
_SQL_START_RE = re.compile(
    r"^\s*(?:--[^\n]*\n\s*)*(SELECT|WITH|UPDATE|INSERT|DELETE|CREATE|ALTER|DROP)\b",
    re.IGNORECASE,
)
_SQL_LANGUAGES = frozenset(
    {"sql", "mysql", "postgresql", "postgres", "psql", "sqlite", "tsql", "plsql", "mssql"}
)


def parse_document(text: str, *, identifier: str) -> Document:
    """Split a Markdown page into title, purpose and sections.

    The first level-1 heading is the title and the first prose paragraph after
    it (before any query or table) is the purpose. Every later heading sets
    the label for the SQL code blocks and tables that follow it. Code blocks
    in other languages are ignored.

    Args:
        text: Raw document text.
        identifier: Name used for the document in reports (usually its path).

    Returns:
        The parsed Document.

    Raises:
        ParseError: On a missing title, an unterminated code block or HTML
            table, or a pipe table without a header separator row.
        TableFormatError: If a table's rows disagree with its header.
    """
    lines = text.splitlines()
    title: str | None = None
    purpose: str | None = None
    label = DEFAULT_SECTION_LABEL
    sections: list[Section] = []
    paragraph: list[str] = []

    def close_paragraph() -> None:
        nonlocal purpose
        if paragraph and title is not None and purpose is None and not sections:
            purpose = " ".join(paragraph)
        paragraph.clear()

    i = 0
    while i < len(lines):
        line = lines[i]
        lineno = i + 1

        fence = _FENCE_RE.match(line)
        if fence:
            close_paragraph()
            marker, info = fence.group(1), fence.group(2).lower()
            end = _find_closing_fence(lines, i + 1, marker)
            if end < 0:
                raise ParseError("unterminated code block", section=label, line=lineno)
            body = "\n".join(lines[i + 1 : end])
            if _is_sql_block(info, body):
                sections.append(
                    QuerySection(label=label, line=lineno, sql=body, language=info or None)
                )
            i = end + 1
            continue

        heading = _HEADING_RE.match(line)
        if heading:
            close_paragraph()
            heading_text = heading.group(2).strip()
            if len(heading.group(1)) == 1 and title is None:
                title = heading_text
            else:
                label = heading_text
            i += 1
            continue

        if starts_table(lines, i):
            close_paragraph()
            end = i + 1
            while end < len(lines) and continues_table(lines[end]):
                end += 1
            block = lines[i:end]
            if len(block) < 2 or not is_separator_row(block[1]):
                raise ParseError("missing table header separator", section=label, line=lineno)
            table = parse_markdown_table(block, start_line=lineno, section=label)
            sections.append(TableSection(label=label, line=lineno, table=table))
            i = end
            continue

        if _HTML_TABLE_START_RE.match(line):
            close_paragraph()
            end = _find_html_table_end(lines, i)
            if end < 0:
                raise ParseError("unterminated <table> block", section=label, line=lineno)
            html = "\n".join(lines[i : end + 1])
            table = parse_html_table(html, start_line=lineno, section=label)
            sections.append(TableSection(label=label, line=lineno, table=table))
            i = end + 1
            continue

        if line.strip():
            paragraph.append(line.strip())
        else:
            close_paragraph()
        i += 1

    close_paragraph()
    if title is None:
        raise ParseError("missing document title", line=1)

    logger.debug(
        "Parsed document",
        extra={"identifier": identifier, "sections": len(sections)},
    )
    return Document(
        identifier=identifier,
        title=title,
        purpose=purpose,
        sections=tuple(sections),
    )


def _find_closing_fence(lines: list[str], start: int, marker: str) -> int:
    closing = re.compile(r"^\s{0,3}" + re.escape(marker[0]) + "{" + str(len(marker)) + r",}\s*$")
    for index in range(start, len(lines)):
        if closing.match(lines[index]):
            return index
    return -1


def _find_html_table_end(lines: list[str], start: int) -> int:
    for index in range(start, len(lines)):
        if _HTML_TABLE_END_RE.search(lines[index]):
            return index
    return -1


def _is_sql_block(info: str, body: str) -> bool:
    if info in _SQL_LANGUAGES:
        return True
    return not info and bool(_SQL_START_RE.match(body))
