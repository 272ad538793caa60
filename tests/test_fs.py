"""Tests for file system helpers."""

from svcs.utils.fs import atomic_copy, append_text, read_chunks, safe_read_text


def test_read_chunks(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"abcdefghij")

    assert list(read_chunks(path, size=4)) == [b"abcd", b"efgh", b"ij"]


def test_read_chunks_empty_file(tmp_path):
    path = tmp_path / "empty.bin"
    path.write_bytes(b"")

    assert list(read_chunks(path)) == []


def test_atomic_copy_creates_parents(tmp_path):
    src = tmp_path / "src.txt"
    src.write_text("content")
    dst = tmp_path / "nested" / "dir" / "dst.txt"

    atomic_copy(src, dst)

    assert dst.read_text() == "content"
    assert [p.name for p in dst.parent.iterdir()] == ["dst.txt"]


def test_append_text(tmp_path):
    path = tmp_path / "log.txt"

    append_text(path, "one\n")
    append_text(path, "two\n")

    assert path.read_text() == "one\ntwo\n"


def test_safe_read_text_missing(tmp_path):
    assert safe_read_text(tmp_path / "missing.txt") is None
    assert safe_read_text(tmp_path / "missing.txt", "") == ""
