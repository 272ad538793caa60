"""Checkout: restore tracked files from a snapshot.

Checkout only ever overwrites. A tracked file with no entry in the chosen
snapshot is left as it is, and no record of the checkout is kept.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from ..utils.fs import atomic_copy
from ..utils.log import log_debug
from .errors import NothingTrackedError, StorageError
from .index import TrackedFileList
from .snapshot_store import SnapshotStore


@dataclass
class CheckoutResult:
    """Result of a checkout."""
    commit_id: str
    restored: list[str] = field(default_factory=list)
    untouched: list[str] = field(default_factory=list)


class CheckoutEngine:
    """Writes snapshot contents back into the working area."""
    
    def __init__(self, store: SnapshotStore, index: TrackedFileList):
        self.store = store
        self.index = index
    
    def restore(self, commit_id: str) -> CheckoutResult:
        """Overwrite tracked files with their content at commit_id.
        
        Every source is located before the first write, so a missing
        commit leaves the working area untouched.
        
        Raises:
            CommitNotFoundError: if no snapshot exists for commit_id
            NothingTrackedError: if the index is empty
            StorageError: if a file cannot be written
        """
        snapshot = self.store.load(commit_id)
        
        tracked = self.index.paths()
        if not tracked:
            raise NothingTrackedError()
        
        plan: list[tuple[str, Path, Path]] = []
        result = CheckoutResult(commit_id=commit_id)
        for path in tracked:
            source = snapshot.source(path)
            if source is None:
                result.untouched.append(path)
                continue
            plan.append((path, source, self._target_for(path, snapshot.keyed_by_path)))
        
        for path, source, target in plan:
            try:
                atomic_copy(source, target)
            except OSError as e:
                raise StorageError(f"Failed to restore {path}: {e}") from e
            log_debug(f"Restored {path} from {commit_id}")
            result.restored.append(path)
        
        return result
    
    def _target_for(self, path: str, keyed_by_path: bool) -> Path:
        if keyed_by_path:
            return self.index.resolve(path)
        # Base-name snapshots restore into the top of the working area
        return self.index.work_root / os.path.basename(path)
