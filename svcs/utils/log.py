"""Stderr logging for SVCS.

stdout is reserved for the exact user-facing strings, so diagnostics
always go to stderr.
"""

from __future__ import annotations

import sys

from .env import is_debug_mode


def log_debug(message: str) -> None:
    """Log debug message to stderr.
    
    Only outputs if SVCS_DEBUG is set.
    """
    if is_debug_mode():
        print(f"[svcs] {message}", file=sys.stderr)


def log_notice(message: str) -> None:
    """Print a notice to stderr regardless of debug mode."""
    print(message, file=sys.stderr)
