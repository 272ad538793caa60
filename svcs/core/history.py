"""Append-only commit history (log.txt).

Each record is written as::

    commit <id>
    Author: <name>
    <message>
    <blank line>

Records are stored oldest first and shown newest first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from ..utils.fs import append_text, safe_read_text
from .errors import StorageError


RECORD_SEPARATOR = "\n\n"

# A separator only ends a record when a full record header follows it
_RECORD_BOUNDARY = re.compile(r"\n\n(?=commit [0-9a-f]{64}\nAuthor: )")


@dataclass(frozen=True, slots=True)
class HistoryRecord:
    """One logged commit."""
    commit_id: str
    author: str
    message: str
    
    def format(self) -> str:
        """Render the record as shown by `log` (no trailing separator)."""
        return f"commit {self.commit_id}\nAuthor: {self.author}\n{self.message}"
    
    @classmethod
    def parse(cls, block: str) -> HistoryRecord | None:
        """Parse one record block, or None if it is not a record."""
        if not block.startswith("commit "):
            return None
        lines = block.split("\n", 2)
        commit_id = lines[0][len("commit "):].strip()
        author = ""
        if len(lines) > 1 and lines[1].startswith("Author: "):
            author = lines[1][len("Author: "):]
            message = lines[2] if len(lines) > 2 else ""
        else:
            message = "\n".join(lines[1:])
        return cls(commit_id=commit_id, author=author, message=message)


class HistoryLog:
    """Reads and appends commit records."""
    
    def __init__(self, log_path: Path):
        self.log_path = Path(log_path)
    
    def append(self, record: HistoryRecord) -> None:
        """Append a record to the end of the log."""
        try:
            append_text(self.log_path, record.format() + RECORD_SEPARATOR)
        except OSError as e:
            raise StorageError(f"Failed to append to log: {e}") from e
    
    def records(self) -> list[HistoryRecord]:
        """Return all records, oldest first.
        
        Blank lines inside a message stay part of that message; only a
        blank line followed by a complete record header starts a new one.
        """
        data = safe_read_text(self.log_path, "") or ""
        if data.endswith(RECORD_SEPARATOR):
            data = data[:-len(RECORD_SEPARATOR)]
        if not data:
            return []
        
        records: list[HistoryRecord] = []
        for block in _RECORD_BOUNDARY.split(data):
            record = HistoryRecord.parse(block)
            if record is not None:
                records.append(record)
        return records
    
    def show(self) -> list[HistoryRecord]:
        """Return all records, newest first. Empty means no commits yet."""
        return list(reversed(self.records()))
    
    def contains(self, commit_id: str) -> bool:
        return any(r.commit_id == commit_id for r in self.records())
