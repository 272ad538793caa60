"""Utility modules for SVCS."""

from .fs import atomic_copy, atomic_write, append_text, ensure_dir, read_chunks, safe_json_load, safe_read_text
from .env import get_home_dir, get_global_svcs_dir, get_root_override, is_debug_mode
from .log import log_debug, log_notice

__all__ = [
    "atomic_copy",
    "atomic_write",
    "append_text",
    "ensure_dir",
    "read_chunks",
    "safe_json_load",
    "safe_read_text",
    "get_home_dir",
    "get_global_svcs_dir",
    "get_root_override",
    "is_debug_mode",
    "log_debug",
    "log_notice",
]
