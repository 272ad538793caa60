"""File system utilities for SVCS.

Provides atomic writes, appends, chunked reads and directory creation.
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Iterator


CHUNK_SIZE = 4096


def atomic_write(file_path: Path | str, content: str | bytes, mode: str = "w") -> None:
    """Write content atomically using tempfile + rename pattern.
    
    Args:
        file_path: Target file path
        content: Content to write
        mode: Write mode ('w' for text, 'wb' for binary)
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    
    # Create temp file in same directory for atomic rename
    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp"
    )
    
    try:
        with os.fdopen(fd, mode) as f:
            f.write(content)
        os.replace(tmp_path, path)
    except Exception:
        # Clean up temp file on failure
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def atomic_copy(src: Path | str, dst: Path | str) -> None:
    """Copy src over dst so that dst is never left half-written."""
    path = Path(dst)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp"
    )
    os.close(fd)

    try:
        shutil.copyfile(src, tmp_path)
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def append_text(file_path: Path | str, content: str) -> None:
    """Append text to a file, creating it if needed."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(content)


def ensure_dir(dir_path: Path | str) -> Path:
    """Ensure directory exists, creating it if necessary.
    
    Args:
        dir_path: Directory path to create
        
    Returns:
        Path object for the directory
    """
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def read_chunks(file_path: Path | str, size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """Yield the raw bytes of a file in fixed-size chunks.
    
    Raises OSError if the file cannot be opened; callers decide whether
    that is fatal.
    """
    with open(file_path, "rb") as f:
        chunk = f.read(size)
        while chunk:
            yield chunk
            chunk = f.read(size)


def safe_read_text(file_path: Path | str, default: str | None = None) -> str | None:
    """Read a text file, returning default if it is missing or unreadable.
    
    Args:
        file_path: Path to read
        default: Value returned on failure
        
    Returns:
        File contents or default
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError):
        return default


def safe_json_load(file_path: Path | str, default: Any = None) -> Any:
    """Safely load JSON file with fallback.
    
    Args:
        file_path: Path to JSON file
        default: Default value if file doesn't exist or is invalid
        
    Returns:
        Parsed JSON or default value
    """
    try:
        with open(file_path) as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError):
        return default if default is not None else {}
