"""Parse and serialize example tables."""

from __future__ import annotations

import re
from typing import Iterable, Sequence

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML table parsing (pip install beautifulsoup4)."
    ) from exc

from sqldocs_check.exceptions import TableFormatError
from sqldocs_check.schemas import Table

_SEPARATOR_CELL_RE = re.compile(r"^:?-+:?$")
_UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")


def is_table_row(line: str) -> bool:
    """Check if a line looks like a pipe-delimited table row."""
    stripped = line.strip()
    return stripped.startswith("|") and len(stripped) > 1


def has_unescaped_pipe(line: str) -> bool:
    """Check if a line contains a pipe that is not escaped as ``\\|``."""
    return bool(_UNESCAPED_PIPE_RE.search(line))


def starts_table(lines: Sequence[str], index: int) -> bool:
    """Check if a table begins at ``lines[index]``.

    A row with a leading pipe always starts a table. Without one, the line
    must contain a pipe and be followed by a separator row that has one too.
    """
    line = lines[index]
    if is_table_row(line):
        return True
    if index + 1 >= len(lines) or not has_unescaped_pipe(line):
        return False
    following = lines[index + 1]
    return has_unescaped_pipe(following) and is_separator_row(following)


def continues_table(line: str) -> bool:
    """Check if a line after a table header is still a table row."""
    return is_table_row(line) or (bool(line.strip()) and has_unescaped_pipe(line))


def is_separator_row(line: str) -> bool:
    """Check if a line is a header separator such as ``| --- | :---: |``."""
    if "-" not in line:
        return False
    cells = split_table_row(line)
    return bool(cells) and all(_SEPARATOR_CELL_RE.match(cell) for cell in cells)


def split_table_row(line: str) -> list[str]:
    """Split a pipe-delimited row into stripped cells.

    Leading and trailing pipes are optional. ``\\|`` is an escaped pipe and
    stays inside the cell as ``|``.
    """
    text = line.strip()
    if text.startswith("|"):
        text = text[1:]
    if text.endswith("|") and not text.endswith("\\|"):
        text = text[:-1]

    cells: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "\\" and i + 1 < len(text) and text[i + 1] == "|":
            current.append("|")
            i += 2
            continue
        if char == "|":
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    cells.append("".join(current).strip())
    return cells


def parse_markdown_table(
    lines: Sequence[str], *, start_line: int = 1, section: str | None = None
) -> Table:
    """Build a Table from the raw lines of a Markdown table.

    Args:
        lines: Header row, separator row, then data rows.
        start_line: Source line number of the header row, used in errors.
        section: Section label, used in errors.

    Returns:
        The parsed Table.

    Raises:
        TableFormatError: If the separator is missing, a column name is empty
            or duplicated, or any row has a different cell count than the
            header. Rows are never truncated or padded.
    """
    if len(lines) < 2 or not is_separator_row(lines[1]):
        raise TableFormatError(
            "table is missing its header separator row",
            section=section,
            line=start_line,
        )

    columns = split_table_row(lines[0])
    _check_columns(columns, section=section, line=start_line)

    separator = split_table_row(lines[1])
    if len(separator) != len(columns):
        raise TableFormatError(
            f"separator row has {len(separator)} cells, header has {len(columns)}",
            section=section,
            line=start_line + 1,
        )

    rows: list[tuple[str, ...]] = []
    for offset, line in enumerate(lines[2:], start=2):
        cells = split_table_row(line)
        if len(cells) != len(columns):
            raise TableFormatError(
                f"row has {len(cells)} cells, header has {len(columns)}",
                section=section,
                line=start_line + offset,
            )
        rows.append(tuple(cells))

    return Table(columns=tuple(columns), rows=tuple(rows))


def format_markdown_table(table: Table) -> str:
    """Serialize a Table back to Markdown pipe syntax."""
    lines = [
        _format_row(table.columns),
        "| " + " | ".join("---" for _ in table.columns) + " |",
    ]
    for row in table.rows:
        lines.append(_format_row(row))
    return "\n".join(lines)


def parse_html_table(
    html: str, *, start_line: int = 1, section: str | None = None
) -> Table:
    """Build a Table from a raw HTML ``<table>`` fragment.

    The first row is the header, whether it uses ``th`` or ``td`` cells.
    """
    soup = BeautifulSoup(html, "lxml")
    table = soup.find("table")
    if not isinstance(table, Tag):
        raise TableFormatError("no <table> element found", section=section, line=start_line)

    rows: list[list[str]] = []
    for row in table.find_all("tr"):
        if row.find_parent("table") is not table:
            continue
        cells = row.find_all(["th", "td"], recursive=False)
        rows.append([_normalize_text(cell.get_text(" ", strip=True)) for cell in cells])

    if not rows:
        raise TableFormatError("HTML table has no rows", section=section, line=start_line)

    columns = rows[0]
    _check_columns(columns, section=section, line=start_line)
    for index, cells in enumerate(rows[1:], start=2):
        if len(cells) != len(columns):
            raise TableFormatError(
                f"HTML row {index} has {len(cells)} cells, header has {len(columns)}",
                section=section,
                line=start_line,
            )
    return Table(columns=tuple(columns), rows=tuple(tuple(cells) for cells in rows[1:]))


def _check_columns(columns: Iterable[str], *, section: str | None, line: int) -> None:
    seen: set[str] = set()
    for name in columns:
        if not name:
            raise TableFormatError("table has an empty column name", section=section, line=line)
        if name in seen:
            raise TableFormatError(
                f"duplicate column name {name!r}", section=section, line=line
            )
        seen.add(name)


def _format_row(cells: Iterable[str]) -> str:
    return "| " + " | ".join(cell.replace("|", "\\|") for cell in cells) + " |"


def _normalize_text(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()
