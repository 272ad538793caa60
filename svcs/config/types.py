"""Configuration schemas for SVCS.

Defines dataclasses for all configuration structures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SnapshotLayout(str, Enum):
    """How tracked files are keyed inside a commit directory."""
    PATH = "path"          # keyed by full tracked path, via manifest
    BASENAME = "basename"  # keyed by base name only, no manifest


@dataclass
class SnapshotConfig:
    """Snapshot storage settings."""
    layout: SnapshotLayout = SnapshotLayout.PATH
    report_skipped: bool = True
    
    @classmethod
    def from_dict(cls, data: dict) -> SnapshotConfig:
        """Create SnapshotConfig from dictionary."""
        layout_val = data.get("layout", "path")
        layout = SnapshotLayout.PATH
        if isinstance(layout_val, str) and layout_val in {"path", "basename"}:
            layout = SnapshotLayout(layout_val)

        report_val = data.get("reportSkipped", True)
        return cls(
            layout=layout,
            report_skipped=report_val if isinstance(report_val, bool) else True,
        )


@dataclass
class SvcsConfig:
    """Main SVCS configuration."""
    vcs_dir: str = "vcs"
    snapshot: SnapshotConfig = field(default_factory=SnapshotConfig)
    
    @classmethod
    def from_dict(cls, data: dict) -> SvcsConfig:
        """Create SvcsConfig from dictionary."""
        vcs_dir = data.get("vcsDir", "vcs")
        if not isinstance(vcs_dir, str) or not vcs_dir.strip():
            vcs_dir = "vcs"

        snapshot_data = data.get("snapshot", {})
        return cls(
            vcs_dir=vcs_dir.strip(),
            snapshot=SnapshotConfig.from_dict(snapshot_data if isinstance(snapshot_data, dict) else {}),
        )
    
    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "vcsDir": self.vcs_dir,
            "snapshot": {
                "layout": self.snapshot.layout.value,
                "reportSkipped": self.snapshot.report_skipped,
            },
        }
