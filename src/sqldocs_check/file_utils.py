"""File helpers for discovering and reading documents."""

from __future__ import annotations

import asyncio
from pathlib import Path

from sqldocs_check.config import SQLDOCS_CHECK_ENCODING, SQLDOCS_CHECK_PATTERN


def discover_documents(root: Path, pattern: str = SQLDOCS_CHECK_PATTERN) -> list[Path]:
    """List documents under a path in a stable order.

    Args:
        root: A directory to search recursively, or a single file.
        pattern: Glob pattern matched against file names.

    Returns:
        Sorted document paths. A file path is returned as-is.

    Raises:
        FileNotFoundError: If ``root`` does not exist.
    """
    if not root.exists():
        raise FileNotFoundError(f"Input path not found: {root}")
    if root.is_file():
        return [root]
    return sorted(path for path in root.rglob(pattern) if path.is_file())


async def read_text_async(path: Path, encoding: str = SQLDOCS_CHECK_ENCODING) -> str:
    """Read text from a file asynchronously using a thread pool.

    Args:
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The file contents as a string.
    """
    return await asyncio.to_thread(path.read_text, encoding=encoding)


async def write_text_async(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write text to a file asynchronously using a thread pool.

    Args:
        path: Destination file, replaced if it exists.
        content: Text to write.
        encoding: Encoding used for the file.
    """
    await asyncio.to_thread(path.write_text, content, encoding=encoding)
