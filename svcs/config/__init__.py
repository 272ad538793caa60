"""Configuration management for SVCS."""

from .types import (
    SnapshotLayout,
    SnapshotConfig,
    SvcsConfig,
)
from .loader import ConfigLoader

__all__ = [
    "SnapshotLayout",
    "SnapshotConfig",
    "SvcsConfig",
    "ConfigLoader",
]
