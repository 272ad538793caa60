"""Tests for snapshot store."""

import json

import pytest

from svcs.config.types import SnapshotLayout
from svcs.core.errors import CommitNotFoundError, NothingToCommitError
from svcs.core.snapshot_store import MANIFEST_NAME, SnapshotStore, is_commit_id, reserve_name


COMMIT_A = "a" * 64
COMMIT_B = "b" * 64


@pytest.fixture
def work(tmp_path):
    work = tmp_path / "work"
    work.mkdir()
    (work / "a.txt").write_text("A")
    (work / "docs").mkdir()
    (work / "docs" / "a.txt").write_text("docs A")
    return work


@pytest.fixture
def commits_dir(tmp_path):
    return tmp_path / "vcs" / "commits"


@pytest.fixture
def store(commits_dir, work):
    return SnapshotStore(commits_dir, resolve=lambda p: work / p)


@pytest.fixture
def basename_store(commits_dir, work):
    return SnapshotStore(commits_dir, resolve=lambda p: work / p, layout=SnapshotLayout.BASENAME)


class TestSnapshotStore:
    def test_create_snapshot(self, store, commits_dir):
        snapshot = store.create(COMMIT_A, ["a.txt"])

        assert snapshot.directory == commits_dir / COMMIT_A
        assert (commits_dir / COMMIT_A / "a.txt").read_text() == "A"
        assert store.exists(COMMIT_A)
        assert store.ids() == [COMMIT_A]

    def test_duplicate_is_noop(self, store, commits_dir):
        store.create(COMMIT_A, ["a.txt"])

        with pytest.raises(NothingToCommitError):
            store.create(COMMIT_A, ["a.txt"])

        assert sorted(p.name for p in commits_dir.iterdir()) == [COMMIT_A]

    def test_same_basename_kept_apart(self, store):
        snapshot = store.create(COMMIT_A, ["a.txt", "docs/a.txt"])

        assert snapshot.entries == {"a.txt": "a.txt", "docs/a.txt": "a_1.txt"}
        loaded = store.load(COMMIT_A)
        assert loaded.source("a.txt").read_text() == "A"
        assert loaded.source("docs/a.txt").read_text() == "docs A"

    def test_manifest_written(self, store, commits_dir):
        store.create(COMMIT_A, ["a.txt"])

        manifest = json.loads((commits_dir / COMMIT_A / MANIFEST_NAME).read_text())
        assert manifest["files"] == {"a.txt": "a.txt"}

    def test_basename_layout_collides(self, basename_store, commits_dir):
        basename_store.create(COMMIT_A, ["a.txt", "docs/a.txt"])

        stored = sorted(p.name for p in (commits_dir / COMMIT_A).iterdir())
        assert stored == [MANIFEST_NAME, "a.txt"]
        assert (commits_dir / COMMIT_A / "a.txt").read_text() == "docs A"

    def test_unreadable_files_absent(self, store):
        snapshot = store.create(COMMIT_A, ["a.txt", "gone.txt"])

        assert "gone.txt" not in snapshot.entries
        assert store.load(COMMIT_A).source("gone.txt") is None

    def test_stage_not_visible_until_published(self, store):
        staged = store.stage(COMMIT_A, ["a.txt"])

        assert not store.exists(COMMIT_A)
        assert store.ids() == []

        store.publish(staged)
        assert store.exists(COMMIT_A)

    def test_discard_removes_staging(self, store, commits_dir):
        staged = store.stage(COMMIT_A, ["a.txt"])
        store.discard(staged)

        assert list(commits_dir.iterdir()) == []

    def test_sweep_removes_stale_staging(self, store, commits_dir):
        store.stage(COMMIT_A, ["a.txt"])
        store.create(COMMIT_B, ["a.txt"])

        assert store.sweep() == 1
        assert [p.name for p in commits_dir.iterdir()] == [COMMIT_B]

    def test_load_missing(self, store):
        with pytest.raises(CommitNotFoundError):
            store.load(COMMIT_A)

    def test_load_legacy_snapshot_without_manifest(self, store, commits_dir):
        legacy = commits_dir / COMMIT_A
        legacy.mkdir(parents=True)
        (legacy / "a.txt").write_text("old")

        snapshot = store.load(COMMIT_A)

        assert not snapshot.has_manifest
        assert snapshot.source("docs/a.txt").read_text() == "old"
        assert snapshot.source("b.txt") is None

    def test_basename_manifest_records_layout(self, basename_store, commits_dir):
        basename_store.create(COMMIT_A, ["docs/a.txt"])

        manifest = json.loads((commits_dir / COMMIT_A / MANIFEST_NAME).read_text())
        assert manifest["layout"] == "basename"
        assert manifest["files"] == {"docs/a.txt": "a.txt"}
        loaded = basename_store.load(COMMIT_A)
        assert loaded.has_manifest
        assert not loaded.keyed_by_path

    def test_basename_layout_file_named_like_manifest(self, basename_store, commits_dir, work):
        (work / MANIFEST_NAME).write_text('{"files": {}}')

        basename_store.create(COMMIT_A, [MANIFEST_NAME, "a.txt"])

        stored = sorted(p.name for p in (commits_dir / COMMIT_A).iterdir())
        assert stored == [MANIFEST_NAME, ".manifest_1.json", "a.txt"]
        loaded = basename_store.load(COMMIT_A)
        assert loaded.source(MANIFEST_NAME).read_text() == '{"files": {}}'
        assert loaded.source("a.txt").read_text() == "A"

    def test_unversioned_manifest_treated_as_file(self, store, commits_dir):
        legacy = commits_dir / COMMIT_A
        legacy.mkdir(parents=True)
        (legacy / MANIFEST_NAME).write_text('{"files": {"a.txt": "missing.txt"}}')
        (legacy / "a.txt").write_text("old")

        snapshot = store.load(COMMIT_A)

        assert not snapshot.has_manifest
        assert snapshot.source("a.txt").read_text() == "old"
        assert snapshot.source(MANIFEST_NAME) is not None

    def test_invalid_ids_never_exist(self, store, commits_dir):
        commits_dir.mkdir(parents=True)

        assert not store.exists("..")
        assert not store.exists("")
        assert not store.exists("A" * 64)


def test_is_commit_id():
    assert is_commit_id("0123456789abcdef" * 4)
    assert not is_commit_id("0123456789abcdef")
    assert not is_commit_id("g" * 64)


def test_reserve_name():
    assert reserve_name("a.txt", set()) == "a.txt"
    assert reserve_name("a.txt", {"a.txt"}) == "a_1.txt"
    assert reserve_name("a.txt", {"a.txt", "a_1.txt"}) == "a_2.txt"
    assert reserve_name(".manifest.json", {".manifest.json"}) == ".manifest_1.json"
