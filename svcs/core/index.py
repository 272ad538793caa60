"""Tracked file list (the index).

Paths are stored verbatim, one per line, in the order they were added.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..utils.fs import append_text, safe_read_text
from ..utils.log import log_debug
from .errors import StorageError, UntrackableFileError


class TrackedFileList:
    """Append-only list of tracked paths backed by index.txt."""
    
    def __init__(self, index_path: Path, work_root: Path):
        """Initialize tracked file list.
        
        Args:
            index_path: Location of index.txt
            work_root: Directory relative paths are resolved against
        """
        self.index_path = Path(index_path)
        self.work_root = Path(work_root)
    
    def resolve(self, path: str) -> Path:
        """Resolve a tracked path against the working area."""
        return self.work_root / os.path.expanduser(path)
    
    def add(self, path: str) -> str:
        """Start tracking a path.
        
        The path is recorded exactly as given. Adding the same path twice
        records it twice.
        
        Raises:
            UntrackableFileError: if nothing exists at path
            StorageError: if the index cannot be written
        """
        if not path or not self.resolve(path).exists():
            raise UntrackableFileError(path)
        
        try:
            append_text(self.index_path, path + "\n")
        except OSError as e:
            raise StorageError(f"Failed to update index: {e}") from e
        
        log_debug(f"Tracking {path}")
        return path
    
    def paths(self) -> list[str]:
        """Return tracked paths in insertion order.
        
        An empty list means nothing is tracked, including when the index
        is missing or unreadable.
        """
        data = safe_read_text(self.index_path, "") or ""
        return [line for line in data.split("\n") if line]
    
    def list(self) -> list[str]:
        return self.paths()
    
    def __len__(self) -> int:
        return len(self.paths())
