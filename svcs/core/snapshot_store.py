"""Snapshot storage for SVCS.

Each commit is a directory under commits/ named by its 64-hex ID and
holding a full copy of every tracked file that was readable at commit
time. A manifest maps each tracked path to the blob holding its content
and records the layout. In the path layout files sharing a base name get
distinct blobs; in the basename layout they overwrite each other and
checkout writes them into the top of the working area. Snapshots written
before manifests existed are read by base name.

Snapshots are assembled in a hidden staging directory and renamed into
place, so a commit directory is never visible half-written.
"""

from __future__ import annotations

import json
import os
import re
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from ..config.types import SnapshotLayout
from ..utils.fs import atomic_write, ensure_dir, safe_json_load
from ..utils.log import log_debug
from .errors import CommitNotFoundError, NothingToCommitError, StorageError


MANIFEST_NAME = ".manifest.json"
MANIFEST_VERSION = 1
STAGING_PREFIX = ".staging-"

_COMMIT_ID_RE = re.compile(r"^[0-9a-f]{64}$")


def is_commit_id(value: str) -> bool:
    """Check that value looks like a commit ID (64 lowercase hex chars)."""
    return bool(value) and bool(_COMMIT_ID_RE.match(value))


def reserve_name(base_name: str, existence_set: set[str]) -> str:
    """Return base_name, or base_name with a _N suffix if it is taken."""
    if base_name not in existence_set:
        return base_name
    index = 1
    (rootfile, extension) = os.path.splitext(base_name)
    current_name = '%s_%d%s' % (rootfile, index, extension)
    while current_name in existence_set:
        index += 1
        current_name = '%s_%d%s' % (rootfile, index, extension)
    return current_name


@dataclass
class Snapshot:
    """A published commit directory."""
    commit_id: str
    directory: Path
    entries: dict[str, str] = field(default_factory=dict)  # tracked path -> blob name
    has_manifest: bool = False
    keyed_by_path: bool = False
    
    def source(self, tracked_path: str) -> Path | None:
        """Locate the stored copy of a tracked path, if this snapshot has one."""
        if self.has_manifest:
            blob = self.entries.get(tracked_path)
            return self.directory / blob if blob else None
        
        candidate = self.directory / os.path.basename(tracked_path)
        return candidate if candidate.is_file() else None


@dataclass
class StagedSnapshot:
    """A snapshot written to staging but not yet published."""
    commit_id: str
    directory: Path
    entries: dict[str, str] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)


class SnapshotStore:
    """Manages commit directories under commits/."""
    
    def __init__(
        self,
        commits_dir: Path,
        resolve: Callable[[str], Path] = Path,
        layout: SnapshotLayout = SnapshotLayout.PATH,
    ):
        """Initialize snapshot store.
        
        Args:
            commits_dir: Directory holding one subdirectory per commit
            resolve: Maps a tracked path to the working-area file
            layout: How blobs are named inside a commit directory
        """
        self.commits_dir = Path(commits_dir)
        self.resolve = resolve
        self.layout = layout
    
    def path_for(self, commit_id: str) -> Path:
        return self.commits_dir / commit_id
    
    def exists(self, commit_id: str) -> bool:
        """Check whether a published snapshot exists for commit_id."""
        if not is_commit_id(commit_id):
            return False
        return self.path_for(commit_id).is_dir()
    
    def ids(self) -> list[str]:
        """List published commit IDs (sorted, not chronological)."""
        if not self.commits_dir.is_dir():
            return []
        return sorted(
            entry.name for entry in self.commits_dir.iterdir()
            if entry.is_dir() and is_commit_id(entry.name)
        )
    
    def create(self, commit_id: str, paths: Iterable[str]) -> Snapshot:
        """Stage and immediately publish a snapshot.
        
        Raises:
            NothingToCommitError: if a snapshot for commit_id already exists
            StorageError: if copying or publishing fails
        """
        staged = self.stage(commit_id, paths)
        try:
            return self.publish(staged)
        except StorageError:
            self.discard(staged)
            raise
    
    def stage(self, commit_id: str, paths: Iterable[str]) -> StagedSnapshot:
        """Copy tracked files into a fresh staging directory.
        
        Paths that are not readable files are left out and listed in
        ``skipped``.
        
        Raises:
            NothingToCommitError: if a snapshot for commit_id already exists
            StorageError: if the staging directory cannot be written
        """
        if self.exists(commit_id):
            raise NothingToCommitError()
        
        try:
            ensure_dir(self.commits_dir)
            staging = Path(tempfile.mkdtemp(
                dir=self.commits_dir,
                prefix=f"{STAGING_PREFIX}{commit_id[:12]}-",
            ))
        except OSError as e:
            raise StorageError(f"Failed to create snapshot directory: {e}") from e
        
        staged = StagedSnapshot(commit_id=commit_id, directory=staging)
        try:
            self._copy_files(staged, paths)
            self._write_manifest(staged)
        except OSError as e:
            self.discard(staged)
            raise StorageError(f"Failed to write snapshot {commit_id}: {e}") from e
        
        log_debug(f"Staged {len(staged.entries)} file(s) for {commit_id} in {staging.name}")
        return staged
    
    def publish(self, staged: StagedSnapshot) -> Snapshot:
        """Move a staged snapshot to its final commit directory."""
        target = self.path_for(staged.commit_id)
        try:
            os.rename(staged.directory, target)
        except OSError as e:
            raise StorageError(f"Failed to publish snapshot {staged.commit_id}: {e}") from e
        
        log_debug(f"Published snapshot {staged.commit_id}")
        return Snapshot(
            commit_id=staged.commit_id,
            directory=target,
            entries=dict(staged.entries),
            has_manifest=True,
            keyed_by_path=self.layout == SnapshotLayout.PATH,
        )
    
    def discard(self, staged: StagedSnapshot) -> None:
        """Remove a staged snapshot that will not be published."""
        shutil.rmtree(staged.directory, ignore_errors=True)
    
    def sweep(self) -> int:
        """Remove staging directories left behind by interrupted commits.
        
        Returns:
            Number of directories removed
        """
        if not self.commits_dir.is_dir():
            return 0
        
        removed = 0
        for entry in self.commits_dir.iterdir():
            if entry.is_dir() and entry.name.startswith(STAGING_PREFIX):
                shutil.rmtree(entry, ignore_errors=True)
                log_debug(f"Removed stale staging directory {entry.name}")
                removed += 1
        return removed
    
    def load(self, commit_id: str) -> Snapshot:
        """Load a published snapshot.
        
        Raises:
            CommitNotFoundError: if no snapshot exists for commit_id
        """
        if not self.exists(commit_id):
            raise CommitNotFoundError(commit_id)
        
        directory = self.path_for(commit_id)
        manifest = safe_json_load(directory / MANIFEST_NAME, None)
        files = None
        if isinstance(manifest, dict) and "version" in manifest:
            files = manifest.get("files")
        if isinstance(files, dict):
            return Snapshot(
                commit_id=commit_id,
                directory=directory,
                entries={str(k): str(v) for k, v in files.items()},
                has_manifest=True,
                keyed_by_path=manifest.get("layout", SnapshotLayout.PATH.value) == SnapshotLayout.PATH.value,
            )
        
        # No manifest: blobs are keyed by base name
        entries = {
            entry.name: entry.name for entry in directory.iterdir()
            if entry.is_file()
        }
        return Snapshot(commit_id=commit_id, directory=directory, entries=entries)
    
    def _copy_files(self, staged: StagedSnapshot, paths: Iterable[str]) -> None:
        used: set[str] = {MANIFEST_NAME}
        for path in paths:
            if not path:
                continue
            src = self.resolve(path)
            if not src.is_file():
                staged.skipped.append(path)
                continue
            
            base = os.path.basename(path)
            if self.layout == SnapshotLayout.PATH:
                if path in staged.entries:
                    # Same path tracked twice
                    continue
                blob = reserve_name(base, used)
                used.add(blob)
            else:
                # Colliding base names overwrite each other
                blob = reserve_name(base, {MANIFEST_NAME})
            
            shutil.copyfile(src, staged.directory / blob)
            staged.entries[path] = blob
    
    def _write_manifest(self, staged: StagedSnapshot) -> None:
        data = {
            "version": MANIFEST_VERSION,
            "layout": self.layout.value,
            "files": staged.entries,
        }
        atomic_write(staged.directory / MANIFEST_NAME, json.dumps(data, indent=2), mode="w")
