"""Author name store (config.txt)."""

from __future__ import annotations

from pathlib import Path

from ..utils.fs import atomic_write, safe_read_text
from .errors import StorageError


class AuthorStore:
    """Single-value store for the commit author name."""
    
    def __init__(self, config_path: Path):
        self.config_path = Path(config_path)
    
    def get(self) -> str | None:
        """Return the configured author, or None if unset."""
        data = safe_read_text(self.config_path)
        if data is None:
            return None
        name = data.strip()
        return name or None
    
    def set(self, name: str) -> str:
        """Overwrite the configured author."""
        try:
            atomic_write(self.config_path, name, mode="w")
        except OSError as e:
            raise StorageError(f"Failed to write username: {e}") from e
        return name
