from __future__ import annotations

import json
from pathlib import Path

from svcs.config import ConfigLoader, SnapshotLayout, SvcsConfig


def _write_global_config(tmp_home: Path, data: dict) -> None:
    cfg_dir = tmp_home / ".svcs"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    (cfg_dir / "config.json").write_text(json.dumps(data, indent=2), encoding="utf-8")


def test_defaults(tmp_path):
    cfg = ConfigLoader(project_root=tmp_path / "proj").load()

    assert cfg.vcs_dir == "vcs"
    assert cfg.snapshot.layout == SnapshotLayout.PATH
    assert cfg.snapshot.report_skipped is True


def test_global_config(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    _write_global_config(tmp_path, {"snapshot": {"layout": "basename"}})

    cfg = ConfigLoader(project_root=tmp_path / "proj").load()
    assert cfg.snapshot.layout == SnapshotLayout.BASENAME
    assert cfg.snapshot.report_skipped is True


def test_project_config_overrides_global(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    _write_global_config(tmp_path, {"vcsDir": "global", "snapshot": {"layout": "basename"}})
    project = tmp_path / "proj"
    project.mkdir()
    (project / ".svcs.json").write_text(json.dumps({"snapshot": {"reportSkipped": False}}))

    cfg = ConfigLoader(project_root=project).load()
    assert cfg.vcs_dir == "global"
    assert cfg.snapshot.layout == SnapshotLayout.BASENAME
    assert cfg.snapshot.report_skipped is False


def test_invalid_values_fall_back(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    _write_global_config(tmp_path, {"vcsDir": "", "snapshot": {"layout": "tree", "reportSkipped": "no"}})

    cfg = ConfigLoader(project_root=tmp_path / "proj").load()
    assert cfg.vcs_dir == "vcs"
    assert cfg.snapshot.layout == SnapshotLayout.PATH
    assert cfg.snapshot.report_skipped is True


def test_save_config_roundtrip(tmp_path):
    project = tmp_path / "proj"
    loader = ConfigLoader(project_root=project)
    config = SvcsConfig(vcs_dir="history")

    path = loader.save_config(config, scope="project")

    assert path == project / ".svcs.json"
    assert loader.load().vcs_dir == "history"
