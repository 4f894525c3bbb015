"""End-to-end tests for get_files()."""

from __future__ import annotations

import asyncio
import errno
import logging
from pathlib import Path

import pytest

from treepick import AccessError, FileDescriptor, get_files, get_files_async
from treepick.file_walker import walker as walker_module


def _make_photos(tmp_path: Path) -> Path:
    photos = tmp_path / "data" / "photos"
    (photos / "sub").mkdir(parents=True)
    (photos / "a.jpg").write_bytes(b"jpeg-a")
    (photos / ".DS_Store").write_bytes(b"junk")
    (photos / "sub" / "b.jpg").write_bytes(b"jpeg-bb")
    return photos


def _paths(files: list[FileDescriptor]) -> list[tuple[str, ...]]:
    return sorted(f.path for f in files)


def test_extension_pattern_relative_paths(tmp_path: Path):
    photos = _make_photos(tmp_path)
    files = get_files(photos, {"files": ["*.jpg"], "reverse": False, "keepRoot": False})
    assert _paths(files) == [("a.jpg",), ("sub", "b.jpg")]


def test_keep_root_with_root_folder(tmp_path: Path):
    photos = _make_photos(tmp_path)
    files = get_files(photos, {"files": ["*.jpg"], "keepRoot": True, "rootFolder": "photos"})
    assert _paths(files) == [("photos", "a.jpg"), ("photos", "sub", "b.jpg")]


def test_keep_root_without_root_folder(tmp_path: Path):
    photos = _make_photos(tmp_path)
    files = get_files(str(photos) + "/", {"files": ["*.jpg"], "keepRoot": True})
    assert _paths(files) == [("photos", "a.jpg"), ("photos", "sub", "b.jpg")]


def test_root_folder_higher_up(tmp_path: Path):
    photos = _make_photos(tmp_path)
    files = get_files(photos, {"files": ["*.jpg"], "keepRoot": True, "rootFolder": "data"})
    assert _paths(files) == [("data", "photos", "a.jpg"), ("data", "photos", "sub", "b.jpg")]


def test_lengths(tmp_path: Path):
    photos = _make_photos(tmp_path)
    by_path = {f.path: f.length for f in get_files(photos, {"files": ["*.jpg"]})}
    assert by_path == {("a.jpg",): 6, ("sub", "b.jpg"): 7}


def test_reverse_without_patterns_selects_everything(tmp_path: Path):
    photos = _make_photos(tmp_path)
    (photos / "notes.txt").write_text("n")
    (photos / "Thumbs.db").write_text("junk")
    files = get_files(photos, {"reverse": True})
    assert _paths(files) == [("a.jpg",), ("notes.txt",), ("sub", "b.jpg")]


def test_no_patterns_selects_nothing(tmp_path: Path):
    photos = _make_photos(tmp_path)
    assert get_files(photos, {"files": []}) == []


def test_missing_options_select_nothing(tmp_path: Path):
    photos = _make_photos(tmp_path)
    assert get_files(photos) == []
    assert get_files(photos, "not a mapping") == []


def test_reverse_excludes_by_segment(tmp_path: Path):
    photos = _make_photos(tmp_path)
    files = get_files(photos, {"files": ["sub"], "reverse": True})
    assert _paths(files) == [("a.jpg",)]


def test_single_file_root(tmp_path: Path):
    photos = _make_photos(tmp_path)
    files = get_files(photos / "a.jpg", {"files": ["*.jpg"]})
    assert _paths(files) == [("a.jpg",)]


def test_middle_wildcard_selects_directory(tmp_path: Path):
    project = tmp_path / "project"
    (project / "build").mkdir(parents=True)
    (project / "src").mkdir()
    (project / "build" / "out.o").write_bytes(b"\x7fELF")
    (project / "src" / "out.o").write_bytes(b"\x7fELF")
    files = get_files(project, {"files": ["build*.o"]})
    assert _paths(files) == [("build", "out.o")]


def test_stream_factory_opens_independent_streams(tmp_path: Path):
    photos = _make_photos(tmp_path)
    [item] = [f for f in get_files(photos, {"files": ["*.jpg"]}) if f.path == ("a.jpg",)]
    with item.stream_factory() as first, item.stream_factory() as second:
        assert first is not second
        assert first.read(2) == b"jp"
        assert second.read() == b"jpeg-a"
        assert first.read() == b"eg-a"


def test_open_shorthand(tmp_path: Path):
    photos = _make_photos(tmp_path)
    for item in get_files(photos, {"files": ["*.jpg"]}):
        with item.open() as f:
            assert len(f.read()) == item.length


def test_stream_open_failure_raises_access_error(tmp_path: Path):
    photos = _make_photos(tmp_path)
    [item] = get_files(photos, {"files": ["a.jpg"]})
    (photos / "a.jpg").unlink()
    with pytest.raises(AccessError):
        item.open()


def test_stat_failure_yields_only_the_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    photos = _make_photos(tmp_path)
    real_stat_entry = walker_module.stat_entry

    def fake_stat_entry(path: str):
        if path.endswith("b.jpg"):
            raise AccessError(errno.EACCES, "Permission denied", path)
        return real_stat_entry(path)

    monkeypatch.setattr(walker_module, "stat_entry", fake_stat_entry)
    with pytest.raises(AccessError) as exc:
        get_files(photos, {"files": ["*.jpg"]})
    assert exc.value.filename == str(photos / "sub" / "b.jpg")


def test_missing_root(tmp_path: Path):
    with pytest.raises(AccessError):
        get_files(tmp_path / "nope", {"reverse": True})


def test_async_entry_point(tmp_path: Path):
    photos = _make_photos(tmp_path)
    files = asyncio.run(get_files_async(photos, {"files": ["*.jpg"]}))
    assert _paths(files) == [("a.jpg",), ("sub", "b.jpg")]


def test_relative_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _make_photos(tmp_path)
    monkeypatch.chdir(tmp_path / "data")
    files = get_files("photos", {"files": ["*.jpg"], "keepRoot": True})
    assert _paths(files) == [("photos", "a.jpg"), ("photos", "sub", "b.jpg")]
    for item in files:
        with item.open() as f:
            assert f.read().startswith(b"jpeg")


def test_debug_log_reports_count_only(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    photos = _make_photos(tmp_path)
    with caplog.at_level(logging.DEBUG, logger="treepick.api"):
        get_files(photos, {"files": ["*.jpg"]})
    messages = [r.getMessage() for r in caplog.records if r.name == "treepick.api"]
    assert messages == [f"Collected 2 files under {photos}"]
