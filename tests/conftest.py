"""Test setup for sqldocs-check."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


COALESCE_DOC = """\
# COALESCE

The COALESCE function returns the first non-NULL value in a list.

## Sample Data

| id | name  | phone    | email         |
|----|-------|----------|---------------|
| 1  | Alice | NULL     | a@example.com |
| 2  | Bob   | 555-0101 | NULL          |

## Query Example

```sql
SELECT name, COALESCE(phone, email) AS contact
FROM users;
```

## Output

| name  | contact       |
|-------|---------------|
| Alice | a@example.com |
| Bob   | 555-0101      |
"""


@pytest.fixture
def coalesce_doc() -> str:
    """A well-formed topic page whose output matches its query."""
    return COALESCE_DOC


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Directory with one passing and one failing document."""
    (tmp_path / "coalesce.md").write_text(COALESCE_DOC, encoding="utf-8")
    (tmp_path / "limit.md").write_text(
        "# LIMIT\n\n"
        "LIMIT restricts the number of rows.\n\n"
        "## Query\n\n"
        "```sql\nSELECT id, name, city FROM customers LIMIT 2;\n```\n\n"
        "## Result\n\n"
        "| id | name |\n"
        "|----|------|\n"
        "| 1  | Ann  |\n",
        encoding="utf-8",
    )
    return tmp_path
