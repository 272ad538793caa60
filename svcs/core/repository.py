"""Repository - main orchestrator.

Wires the tracked file list, snapshot store, history log and checkout
engine to one explicit repository root and implements commit as a single
transaction: stage snapshot, append record, publish snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..config import ConfigLoader, SvcsConfig
from ..utils.fs import ensure_dir
from ..utils.log import log_debug, log_notice
from .author import AuthorStore
from .checkout import CheckoutEngine, CheckoutResult
from .errors import NoAuthorError, NothingToCommitError, NothingTrackedError, StorageError
from .hashing import compute_commit_id
from .history import HistoryLog, HistoryRecord
from .index import TrackedFileList
from .snapshot_store import SnapshotStore


@dataclass
class CommitResult:
    """Result of a successful commit."""
    commit_id: str
    author: str
    message: str
    file_count: int
    skipped: list[str] = field(default_factory=list)


class Repository:
    """A single-user repository rooted at an explicit directory."""
    
    CONFIG_NAME = "config.txt"
    INDEX_NAME = "index.txt"
    LOG_NAME = "log.txt"
    COMMITS_NAME = "commits"
    
    def __init__(self, root: Path | str, config: SvcsConfig | None = None):
        """Initialize repository.
        
        Args:
            root: Working area; repository state lives in root/<vcs_dir>
            config: Settings (loaded from config files when omitted)
        """
        self.root = Path(root)
        self.config = config or ConfigLoader(project_root=self.root).load()
        
        self.vcs_dir = self.root / self.config.vcs_dir
        self.index = TrackedFileList(self.vcs_dir / self.INDEX_NAME, work_root=self.root)
        self.author = AuthorStore(self.vcs_dir / self.CONFIG_NAME)
        self.history = HistoryLog(self.vcs_dir / self.LOG_NAME)
        self.store = SnapshotStore(
            self.vcs_dir / self.COMMITS_NAME,
            resolve=self.index.resolve,
            layout=self.config.snapshot.layout,
        )
        self.checkout_engine = CheckoutEngine(self.store, self.index)
    
    def init(self) -> Path:
        """Create the repository directories if missing."""
        try:
            ensure_dir(self.store.commits_dir)
        except OSError as e:
            raise StorageError(f"Failed to initialize {self.vcs_dir}: {e}") from e
        return self.vcs_dir
    
    def get_author(self) -> str | None:
        return self.author.get()
    
    def set_author(self, name: str) -> str:
        return self.author.set(name)
    
    def add(self, path: str) -> str:
        return self.index.add(path)
    
    def tracked(self) -> list[str]:
        return self.index.paths()
    
    def commit(self, message: str) -> CommitResult:
        """Snapshot the tracked files and record the commit.
        
        Raises:
            NoAuthorError: if no username is configured
            NothingTrackedError: if the index is empty
            NothingToCommitError: if no tracked file is readable, or the
                content matches an existing commit
            StorageError: if writing the snapshot or log fails
        """
        author = self.author.get()
        if author is None:
            raise NoAuthorError()
        
        tracked = self.index.paths()
        if not tracked:
            raise NothingTrackedError()
        
        digest = compute_commit_id(tracked, resolve=self.index.resolve)
        self._report_skipped(digest.skipped)
        if not digest.ok:
            raise NothingToCommitError()
        if self.store.exists(digest.commit_id):
            log_debug(f"Snapshot {digest.commit_id} already exists")
            raise NothingToCommitError()
        
        self.init()
        self.store.sweep()
        
        record = HistoryRecord(
            commit_id=digest.commit_id,
            author=author,
            message=message.strip("\n"),
        )
        staged = self.store.stage(digest.commit_id, digest.read)
        try:
            # The record may already be there from a commit that was
            # interrupted before publishing.
            if not self.history.contains(record.commit_id):
                self.history.append(record)
            self.store.publish(staged)
        except StorageError:
            self.store.discard(staged)
            raise
        
        log_debug(f"Committed {digest.commit_id} ({len(staged.entries)} file(s))")
        return CommitResult(
            commit_id=digest.commit_id,
            author=author,
            message=record.message,
            file_count=len(staged.entries),
            skipped=digest.skipped,
        )
    
    def log(self) -> list[HistoryRecord]:
        """History newest first, limited to commits whose snapshot exists."""
        return [r for r in self.history.show() if self.store.exists(r.commit_id)]
    
    def checkout(self, commit_id: str) -> CheckoutResult:
        """Restore tracked files from commit_id."""
        return self.checkout_engine.restore(commit_id)
    
    def _report_skipped(self, skipped: list[str]) -> None:
        if not skipped or not self.config.snapshot.report_skipped:
            return
        log_notice(f"Skipped {len(skipped)} unreadable file(s).")
