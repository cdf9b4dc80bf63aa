"""Local configuration for sqldocs-check."""

from __future__ import annotations

import os


DEFAULT_PATTERN = "*.md"
DEFAULT_OUTPUT_KEYWORDS = "output,result,returns"
DEFAULT_FORMAT = "text"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_ENCODING = "utf-8"

SQLDOCS_CHECK_PATTERN = os.getenv("SQLDOCS_CHECK_PATTERN", DEFAULT_PATTERN)
SQLDOCS_CHECK_OUTPUT_KEYWORDS = tuple(
    word.strip().lower()
    for word in os.getenv("SQLDOCS_CHECK_OUTPUT_KEYWORDS", DEFAULT_OUTPUT_KEYWORDS).split(",")
    if word.strip()
)
SQLDOCS_CHECK_FORMAT = os.getenv("SQLDOCS_CHECK_FORMAT", DEFAULT_FORMAT)
SQLDOCS_CHECK_LOG_LEVEL = os.getenv("SQLDOCS_CHECK_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
SQLDOCS_CHECK_ENCODING = os.getenv("SQLDOCS_CHECK_ENCODING", DEFAULT_ENCODING)
