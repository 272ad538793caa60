"""Core modules for SVCS."""

from .repository import CommitResult, Repository
from .snapshot_store import SnapshotStore

__all__ = [
    "CommitResult",
    "Repository",
    "SnapshotStore",
]
