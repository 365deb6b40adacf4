from __future__ import annotations

from pathlib import Path

import pytest

from relsync.core.result import Err, Ok
from relsync.services.local_files import (
    DEFAULT_CONTENT_TYPE,
    guess_content_type,
    inspect_local_file,
    read_local_file,
    resolve_file,
    resolve_files,
    split_file_list,
)


def _touch(path: Path, data: bytes = b"x") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def test_split_file_list() -> None:
    raw = "dist/a.zip, dist/b.txt\n\tc.tar.gz\r\n  ,,d.bin "
    assert split_file_list(raw) == ["dist/a.zip", "dist/b.txt", "c.tar.gz", "d.bin"]


def test_split_file_list_empty() -> None:
    assert split_file_list(" \n, ") == []


class TestResolveFile:
    def test_relative_to_workspace(self, tmp_path: Path) -> None:
        target = _touch(tmp_path / "dist" / "a.zip")
        assert resolve_file("dist/a.zip", tmp_path) == Ok(target.resolve())

    def test_absolute_path(self, tmp_path: Path) -> None:
        target = _touch(tmp_path / "elsewhere" / "a.zip")
        workspace = tmp_path / "ws"
        workspace.mkdir()
        assert resolve_file(str(target), workspace) == Ok(target.resolve())

    def test_missing(self, tmp_path: Path) -> None:
        result = resolve_file("nope.zip", tmp_path)
        assert isinstance(result, Err)
        assert result.error.kind == "file_not_found"
        assert result.error.message == (
            "could not find nope.zip as either absolute path or path relative to workspace"
        )

    def test_directory_is_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "dist").mkdir()
        result = resolve_file("dist", tmp_path)
        assert isinstance(result, Err)
        assert result.error.kind == "file_not_found"


class TestResolveFiles:
    def test_keeps_order(self, tmp_path: Path) -> None:
        b = _touch(tmp_path / "b.txt")
        a = _touch(tmp_path / "a.zip")
        assert resolve_files("b.txt a.zip", tmp_path) == Ok((b.resolve(), a.resolve()))

    def test_empty_list(self, tmp_path: Path) -> None:
        result = resolve_files("  ", tmp_path)
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_input"

    def test_first_missing_file_stops(self, tmp_path: Path) -> None:
        _touch(tmp_path / "a.zip")
        result = resolve_files("a.zip missing.bin other.bin", tmp_path)
        assert isinstance(result, Err)
        assert "missing.bin" in result.error.message

    def test_same_path_twice_is_collapsed(self, tmp_path: Path) -> None:
        a = _touch(tmp_path / "a.zip")
        assert resolve_files(f"a.zip {a}", tmp_path) == Ok((a.resolve(),))

    def test_duplicate_basename_is_rejected(self, tmp_path: Path) -> None:
        _touch(tmp_path / "linux" / "app.zip")
        _touch(tmp_path / "mac" / "app.zip")
        result = resolve_files("linux/app.zip mac/app.zip", tmp_path)
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_input"
        assert result.error.message == "duplicate asset name app.zip"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("app.zip", "application/zip"),
        ("notes.txt", "text/plain"),
        ("data.json", "application/json"),
        ("dist.tar.gz", "application/gzip"),
        ("image.PNG", "image/png"),
        ("firmware.hex123", None),
        ("LICENSE", None),
    ],
)
def test_guess_content_type(name: str, expected: str | None) -> None:
    assert guess_content_type(Path(name)) == expected


def test_inspect_local_file(tmp_path: Path) -> None:
    path = _touch(tmp_path / "a.zip", b"PK\x03\x04")
    result = inspect_local_file(path)
    assert isinstance(result, Ok)
    assert result.value.size == 4
    assert result.value.content_type == "application/zip"
    assert result.value.content_type_guessed
    assert result.value.name == "a.zip"


def test_inspect_unknown_type_falls_back(tmp_path: Path) -> None:
    path = _touch(tmp_path / "firmware.hex123")
    result = inspect_local_file(path)
    assert isinstance(result, Ok)
    assert result.value.content_type == DEFAULT_CONTENT_TYPE
    assert not result.value.content_type_guessed


def test_inspect_vanished_file(tmp_path: Path) -> None:
    result = inspect_local_file(tmp_path / "gone.zip")
    assert isinstance(result, Err)
    assert result.error.kind == "file_not_found"


def test_read_local_file(tmp_path: Path) -> None:
    path = _touch(tmp_path / "a.bin", b"\x00\x01")
    local = inspect_local_file(path)
    assert isinstance(local, Ok)
    assert read_local_file(local.value) == Ok(b"\x00\x01")
