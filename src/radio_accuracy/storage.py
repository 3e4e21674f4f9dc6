"""File helpers for radio-accuracy.

Atomic JSON writes for config files and batch reports, plus a JSON reader
that reports missing and malformed files distinctly.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path


class StorageError(Exception):
    """Base exception for storage operations."""

    pass


class NotFoundError(StorageError):
    """Raised when a requested file is not found."""

    pass


def atomic_write(path: Path, data: str, encoding: str = "utf-8") -> None:
    """Write data to a file atomically.

    Writes to a temporary file in the same directory, then renames onto
    the target so readers never see a half-written report.

    Args:
        path: Target file path
        data: String data to write
        encoding: File encoding (default utf-8)

    Raises:
        StorageError: If the write operation fails
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    temp_path = None
    try:
        fd, temp_path = tempfile.mkstemp(
            suffix=".tmp",
            prefix=path.stem + "_",
            dir=path.parent,
        )
        os.write(fd, data.encode(encoding))
        os.fsync(fd)
        os.close(fd)
        fd = None

        os.replace(temp_path, path)
        temp_path = None

    except OSError as e:
        raise StorageError(f"Failed to write {path}: {e}") from e
    finally:
        if fd is not None:
            try:
                os.close(fd)
            except OSError:
                pass
        if temp_path is not None:
            try:
                os.unlink(temp_path)
            except OSError:
                pass


def atomic_write_json(path: Path, data: dict | list, indent: int = 2) -> None:
    """Write JSON data to a file atomically."""
    json_str = json.dumps(data, indent=indent, default=str, ensure_ascii=False)
    atomic_write(path, json_str)


def read_json(path: Path) -> dict | list:
    """Read JSON data from a file.

    Args:
        path: File path to read

    Returns:
        Parsed JSON data

    Raises:
        NotFoundError: If file doesn't exist
        StorageError: If file is unreadable, not UTF-8, or invalid JSON
    """
    if not path.exists():
        raise NotFoundError(f"File not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise StorageError(f"Invalid JSON in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"Failed to read {path}: {e}") from e
