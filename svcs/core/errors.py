"""Exceptions raised by the SVCS core.

UserError subclasses carry the exact message shown to the user; the CLI
prints them verbatim. StorageError wraps filesystem failures.
"""

from __future__ import annotations


class SvcsError(Exception):
    """Base class for all SVCS errors."""


class UserError(SvcsError):
    """A recoverable condition reported to the user; nothing was changed."""

    message = ""

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class NoAuthorError(UserError):
    message = "Please, set a username first with the 'config' command."


class NothingTrackedError(UserError):
    message = "No files are tracked."


class NothingToCommitError(UserError):
    message = "Nothing to commit."


class CommitNotFoundError(UserError):
    message = "Commit does not exist."

    def __init__(self, commit_id: str):
        super().__init__()
        self.commit_id = commit_id


class UntrackableFileError(UserError):
    """Raised by add when the path does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Can't find '{path}'.")
        self.path = path


class StorageError(SvcsError):
    """Raised when reading or writing repository state fails."""
