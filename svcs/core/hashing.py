"""Commit identifier derivation.

A commit ID is the SHA-256 of the raw bytes of every readable tracked
file, fed in tracked-list order with no separators. File names are not
part of the input.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from ..utils.fs import read_chunks
from ..utils.log import log_debug


@dataclass
class CommitDigest:
    """Result of hashing the tracked files."""
    commit_id: str
    ok: bool
    read: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def compute_commit_id(
    paths: Iterable[str],
    resolve: Callable[[str], Path] = Path,
) -> CommitDigest:
    """Hash tracked files into a commit ID.
    
    Unreadable files are skipped and reported in ``skipped``; they
    contribute nothing to the digest. ``ok`` is False when no file was
    read, in which case the ID must not be used.
    
    Args:
        paths: Tracked paths in index order
        resolve: Maps a tracked path to the file to read
        
    Returns:
        CommitDigest with the hex digest and read/skipped paths
    """
    hasher = hashlib.sha256()
    read: list[str] = []
    skipped: list[str] = []
    
    for path in paths:
        if not path:
            continue
        # A file that fails mid-read must not reach the running digest.
        candidate = hasher.copy()
        try:
            for chunk in read_chunks(resolve(path)):
                candidate.update(chunk)
        except OSError as e:
            log_debug(f"Skipping unreadable file {path}: {e}")
            skipped.append(path)
            continue
        
        hasher = candidate
        read.append(path)
    
    return CommitDigest(
        commit_id=hasher.hexdigest(),
        ok=bool(read),
        read=read,
        skipped=skipped,
    )
