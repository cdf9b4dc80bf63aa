"""Tests for SQL select-list analysis."""

from __future__ import annotations

import pytest

from sqldocs_check.exceptions import SqlSyntaxError
from sqldocs_check.sql_utils import (
    check_sql_syntax,
    count_select_expressions,
    extract_select_list,
    mask_sql,
    split_statements,
    split_top_level,
    strip_comments,
)


@pytest.mark.parametrize(
    ("sql", "expected"),
    [
        ("SELECT a, b, c FROM t", 3),
        ("SELECT name, COALESCE(phone, email) AS contact FROM users", 2),
        ("select a as x, b y from t", 2),
        ("SELECT DISTINCT city, country FROM customers", 2),
        ("SELECT TOP 5 id, name FROM products", 2),
        ("SELECT TOP (10) PERCENT id FROM products", 1),
        ("SELECT DISTINCT ON (city) city, name FROM customers", 2),
        ("SELECT COUNT(*) FROM orders", 1),
        ("SELECT ROUND(AVG(price), 2) AS avg_price, MAX(price) FROM products", 2),
        (
            "SELECT id, CASE WHEN qty > 10 THEN 'bulk' ELSE 'single' END AS size FROM orders",
            2,
        ),
        ("SELECT 'a, b' AS label, \"x,y\" FROM t", 2),
        ("SELECT [first, name], id FROM people", 2),
        ("SELECT 1 + 1", 1),
        (
            "SELECT customer_id, SUM(amount) AS total FROM orders "
            "GROUP BY customer_id HAVING SUM(amount) > 100",
            2,
        ),
        (
            "SELECT c.name, o.id, o.total FROM customers c "
            "LEFT JOIN orders o ON o.customer_id = c.id",
            3,
        ),
        (
            "WITH recent AS (SELECT id, total FROM orders WHERE day > '2024-01-01') "
            "SELECT id FROM recent",
            1,
        ),
        ("SELECT a FROM t1 UNION SELECT b FROM t2", 1),
        ("SELECT id, name FROM products ORDER BY name LIMIT 5 OFFSET 10", 2),
        ("SELECT a, (SELECT MAX(b) FROM u) AS m FROM t", 2),
        ("SELECT top10, name FROM scores", 2),
        ("SELECT distinct_id, all_count FROM visits", 2),
        ("SELECT DISTINCT all_count FROM visits", 1),
    ],
)
def test_count_select_expressions(sql: str, expected: int) -> None:
    assert count_select_expressions(sql) == expected


class TestExtractSelectList:
    """Tests for extract_select_list function."""

    def test_returns_expressions_in_order(self) -> None:
        select_list = extract_select_list("SELECT name, COALESCE(a, b) AS c FROM t")

        assert select_list is not None
        assert select_list.expressions == ("name", "COALESCE(a, b) AS c")

    def test_multiline_query(self) -> None:
        sql = "SELECT\n    id,\n    name\nFROM\n    users\nWHERE id > 1;"
        select_list = extract_select_list(sql)

        assert select_list is not None
        assert select_list.expressions == ("id", "name")

    def test_uses_last_query_statement(self) -> None:
        """The last SELECT in a block is the one whose output is shown."""
        sql = "UPDATE t SET a = 1 WHERE id = 2;\nSELECT id, a FROM t;"
        select_list = extract_select_list(sql)

        assert select_list is not None
        assert select_list.count == 2

    def test_update_without_select_returns_none(self) -> None:
        assert extract_select_list("UPDATE t SET a = (SELECT 1) WHERE id = 2;") is None

    def test_insert_select_is_not_a_query(self) -> None:
        assert extract_select_list("INSERT INTO t SELECT a, b FROM s") is None

    def test_ignores_commented_out_columns(self) -> None:
        sql = "SELECT a, -- b,\n  c /* , d */ FROM t"
        assert count_select_expressions(sql) == 2

    @pytest.mark.parametrize("sql", ["SELECT * FROM t", "SELECT c.* FROM customers c"])
    def test_detects_star(self, sql: str) -> None:
        select_list = extract_select_list(sql)

        assert select_list is not None
        assert select_list.has_star

    def test_count_star_is_not_a_star(self) -> None:
        select_list = extract_select_list("SELECT COUNT(*) FROM t")

        assert select_list is not None
        assert not select_list.has_star

    def test_empty_select_list_raises(self) -> None:
        with pytest.raises(SqlSyntaxError, match="SELECT has no expressions"):
            extract_select_list("SELECT FROM t")

    def test_trailing_comma_raises(self) -> None:
        with pytest.raises(SqlSyntaxError, match="empty expression"):
            extract_select_list("SELECT a, b, FROM t")


class TestMaskSql:
    """Tests for mask_sql function."""

    def test_keeps_length_and_top_level_text(self) -> None:
        sql = "SELECT f(a, 'x)') FROM t"
        masked = mask_sql(sql)

        assert len(masked) == len(sql)
        assert masked.startswith("SELECT f(")
        assert masked.endswith(") FROM t")
        assert "," not in masked

    def test_doubled_quote_is_escaped(self) -> None:
        assert mask_sql("SELECT 'it''s', b") == "SELECT xxxxxxx, b"

    def test_unbalanced_close_raises(self) -> None:
        with pytest.raises(SqlSyntaxError, match=r"unbalanced '\)'"):
            mask_sql("SELECT a) FROM t")

    def test_unclosed_open_raises(self) -> None:
        with pytest.raises(SqlSyntaxError, match="unclosed"):
            mask_sql("SELECT COALESCE(a, b FROM t")

    def test_unterminated_string_raises(self) -> None:
        with pytest.raises(SqlSyntaxError, match="unterminated string literal"):
            mask_sql("SELECT 'abc FROM t")


class TestHelpers:
    """Tests for statement and comment helpers."""

    def test_split_statements(self) -> None:
        sql = "SELECT ';' AS s;\n\nSELECT 2;\n"
        assert split_statements(sql) == ["SELECT ';' AS s", "SELECT 2"]

    def test_split_top_level(self) -> None:
        assert split_top_level("a, f(b, c), 'd,e'") == ["a", "f(b, c)", "'d,e'"]

    def test_strip_comments_keeps_markers_in_strings(self) -> None:
        assert strip_comments("SELECT '--not' -- gone") == "SELECT '--not' "

    def test_unterminated_block_comment_raises(self) -> None:
        with pytest.raises(SqlSyntaxError, match="unterminated block comment"):
            strip_comments("SELECT a /* oops")

    def test_check_sql_syntax_rejects_empty_block(self) -> None:
        with pytest.raises(SqlSyntaxError, match="empty"):
            check_sql_syntax("  -- only a comment\n")

    def test_check_sql_syntax_accepts_valid_query(self) -> None:
        check_sql_syntax("SELECT a FROM t WHERE b IN (1, 2);")


class TestModifierPrefixedColumns:
    """Column names that begin with DISTINCT, ALL or TOP stay intact."""

    def test_keeps_full_column_names(self) -> None:
        select_list = extract_select_list("SELECT top10, distinct_id, all_count FROM scores")

        assert select_list is not None
        assert select_list.expressions == ("top10", "distinct_id", "all_count")
