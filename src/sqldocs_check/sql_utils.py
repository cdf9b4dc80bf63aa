"""Best-effort syntactic analysis of SQL query blocks.

Nothing here knows about schemas or executes anything. The analysis works on
a *masked* copy of the query: string literals, quoted identifiers and
everything nested inside parentheses are overwritten with ``x`` so that
keyword and comma positions found in the mask are guaranteed to sit at the
top level of the original text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sqldocs_check.exceptions import SqlSyntaxError

_QUOTE_PAIRS = {"'": "'", '"': '"', "`": "`", "[": "]"}
_QUOTE_NAMES = {
    "'": "string literal",
    '"': "quoted identifier",
    "`": "quoted identifier",
    "[": "bracketed identifier",
}

_SELECT_RE = re.compile(r"\bSELECT\b", re.IGNORECASE)
_SELECT_MODIFIER_RE = re.compile(
    r"\s+(?:DISTINCT\s+ON\s*\(x*\)|DISTINCT\b|ALL\b"
    r"|TOP(?:\s*\(x*\)|\s+\d+\b)(?:\s+PERCENT\b)?(?:\s+WITH\s+TIES\b)?)",
    re.IGNORECASE,
)
_SELECT_END_RE = re.compile(
    r"\b(?:FROM|INTO|WHERE|GROUP|HAVING|ORDER|LIMIT|OFFSET|FETCH|WINDOW|UNION|INTERSECT|EXCEPT|MINUS)\b",
    re.IGNORECASE,
)
_LEADING_KEYWORD_RE = re.compile(r"^\s*([A-Za-z]+)")
_STAR_RE = re.compile(r"^(?:(?:\w+|\"[^\"]*\"|`[^`]*`|\[[^\]]*\])\.)*\*$")


@dataclass(frozen=True)
class SelectList:
    """Expressions of a top-level SELECT clause, in order."""

    expressions: tuple[str, ...]

    @property
    def count(self) -> int:
        return len(self.expressions)

    @property
    def has_star(self) -> bool:
        """True if any expression is ``*`` or ``alias.*``."""
        return any(_STAR_RE.match(expr) for expr in self.expressions)


def strip_comments(sql: str) -> str:
    """Remove ``--`` line comments and ``/* */`` block comments.

    Comment markers inside string literals and quoted identifiers are left
    alone.

    Raises:
        SqlSyntaxError: If a block comment is never closed.
    """
    out: list[str] = []
    i = 0
    n = len(sql)
    while i < n:
        char = sql[i]
        if char in _QUOTE_PAIRS:
            end = _find_closing_quote(sql, i)
            if end < 0:
                out.append(sql[i:])
                break
            out.append(sql[i : end + 1])
            i = end + 1
            continue
        if sql.startswith("--", i):
            newline = sql.find("\n", i)
            if newline < 0:
                break
            i = newline
            continue
        if sql.startswith("/*", i):
            end = sql.find("*/", i + 2)
            if end < 0:
                raise SqlSyntaxError("unterminated block comment")
            out.append(" ")
            i = end + 2
            continue
        out.append(char)
        i += 1
    return "".join(out)


def mask_sql(sql: str) -> str:
    """Blank out literals, quoted identifiers and parenthesized content.

    The result has the same length as ``sql``. Top-level parentheses are kept
    so expressions such as ``COALESCE(xxxx)`` stay recognizable.

    Raises:
        SqlSyntaxError: On unbalanced parentheses or an unterminated literal.
    """
    out: list[str] = []
    depth = 0
    i = 0
    n = len(sql)
    while i < n:
        char = sql[i]
        if char in _QUOTE_PAIRS:
            end = _find_closing_quote(sql, i)
            if end < 0:
                raise SqlSyntaxError(f"unterminated {_QUOTE_NAMES[char]}")
            out.append("x" * (end - i + 1))
            i = end + 1
            continue
        if char == "(":
            out.append("(" if depth == 0 else "x")
            depth += 1
        elif char == ")":
            if depth == 0:
                raise SqlSyntaxError("unbalanced ')'")
            depth -= 1
            out.append(")" if depth == 0 else "x")
        elif depth > 0:
            out.append("x")
        else:
            out.append(char)
        i += 1
    if depth:
        raise SqlSyntaxError(f"{depth} unclosed '('")
    return "".join(out)


def check_sql_syntax(sql: str) -> None:
    """Raise SqlSyntaxError if a query block is empty or structurally broken."""
    cleaned = strip_comments(sql)
    if not cleaned.strip():
        raise SqlSyntaxError("query block is empty")
    mask_sql(cleaned)


def split_statements(sql: str) -> list[str]:
    """Split a query block on top-level semicolons, dropping empty statements."""
    cleaned = strip_comments(sql)
    masked = mask_sql(cleaned)
    statements: list[str] = []
    start = 0
    for pos, char in enumerate(masked):
        if char == ";":
            statements.append(cleaned[start:pos])
            start = pos + 1
    statements.append(cleaned[start:])
    return [stmt.strip() for stmt in statements if stmt.strip()]


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split on a separator that is not nested in parentheses or quotes."""
    masked = mask_sql(text)
    parts: list[str] = []
    start = 0
    for pos, char in enumerate(masked):
        if char == separator:
            parts.append(text[start:pos].strip())
            start = pos + 1
    parts.append(text[start:].strip())
    return parts


def is_select_statement(statement: str) -> bool:
    """Check if a statement is a query (starts with SELECT or WITH)."""
    match = _LEADING_KEYWORD_RE.match(statement)
    return bool(match) and match.group(1).upper() in {"SELECT", "WITH"}


def extract_select_list(sql: str) -> SelectList | None:
    """Return the select list of the last query statement in a block.

    ``DISTINCT``, ``ALL`` and ``TOP n`` modifiers are skipped. The list ends
    at the first top-level clause keyword (``FROM``, ``WHERE``, ...).

    Returns:
        The SelectList, or None when the block holds no SELECT statement
        (for example a lone ``UPDATE``).

    Raises:
        SqlSyntaxError: If the block is malformed or the select list is empty
            or contains an empty expression.
    """
    queries = [stmt for stmt in split_statements(sql) if is_select_statement(stmt)]
    if not queries:
        return None
    statement = queries[-1]
    masked = mask_sql(statement)

    select = _SELECT_RE.search(masked)
    if select is None:
        return None
    start = select.end()
    modifier = _SELECT_MODIFIER_RE.match(masked, start)
    if modifier:
        start = modifier.end()

    end_match = _SELECT_END_RE.search(masked, start)
    end = end_match.start() if end_match else len(statement)

    select_text = statement[start:end].strip()
    if not select_text:
        raise SqlSyntaxError("SELECT has no expressions")
    expressions = split_top_level(select_text)
    if any(not expr for expr in expressions):
        raise SqlSyntaxError("empty expression in select list")
    return SelectList(expressions=tuple(expressions))


def count_select_expressions(sql: str) -> int | None:
    """Count the selected expressions of a query block, or None without a SELECT."""
    select_list = extract_select_list(sql)
    return select_list.count if select_list else None


def _find_closing_quote(sql: str, start: int) -> int:
    """Return the index of the quote closing the one at ``start``, or -1.

    A doubled quote (``'it''s'``) is an escaped quote, except for brackets.
    """
    closing = _QUOTE_PAIRS[sql[start]]
    j = start + 1
    n = len(sql)
    while j < n:
        if sql[j] == closing:
            if closing != "]" and j + 1 < n and sql[j + 1] == closing:
                j += 2
                continue
            return j
        j += 1
    return -1
