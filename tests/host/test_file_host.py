"""Tests for file-backed host collaborators."""

from pathlib import Path

from headup.host import FileBuffer, LocalFileSystem


def test_open_reads_lines_and_path(tmp_path: Path) -> None:
    path = tmp_path / "notes.md"
    path.write_text("one\ntwo\n", encoding="utf-8")

    buffer = FileBuffer.open(path)

    assert buffer.lines == ["one", "two"]
    assert buffer.path == str(path.resolve())
    assert buffer.is_modified() is False


def test_save_only_writes_when_modified(tmp_path: Path) -> None:
    path = tmp_path / "notes.md"
    path.write_text("one\n", encoding="utf-8")
    buffer = FileBuffer.open(path)

    assert buffer.save() is False

    buffer.set_lines(0, 1, ["uno"])
    assert buffer.save() is True
    assert path.read_text(encoding="utf-8") == "uno\n"
    assert buffer.is_modified() is False


def test_save_preserves_missing_trailing_newline(tmp_path: Path) -> None:
    path = tmp_path / "notes.md"
    path.write_text("one\ntwo", encoding="utf-8")
    buffer = FileBuffer.open(path)

    buffer.set_lines(1, 2, ["dos"])
    buffer.save()

    assert path.read_text(encoding="utf-8") == "one\ndos"


def test_open_strips_crlf_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "notes.md"
    path.write_bytes(b"---\r\nlast_modified: 1\r\n---\r\n")

    buffer = FileBuffer.open(path)

    assert buffer.lines == ["---", "last_modified: 1", "---"]
    assert buffer.newline == "\r\n"


def test_save_preserves_crlf_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "notes.md"
    path.write_bytes(b"a: 1\r\nb: 2\r\n")
    buffer = FileBuffer.open(path)

    buffer.set_lines(0, 1, ["a: 9"])
    buffer.save()

    assert path.read_bytes() == b"a: 9\r\nb: 2\r\n"


def test_save_preserves_crlf_without_trailing_newline(tmp_path: Path) -> None:
    path = tmp_path / "notes.md"
    path.write_bytes(b"a: 1\r\nb: 2")
    buffer = FileBuffer.open(path)

    buffer.set_lines(1, 2, ["b: 3"])
    buffer.save()

    assert path.read_bytes() == b"a: 1\r\nb: 3"



def test_local_filesystem_stat(tmp_path: Path) -> None:
    path = tmp_path / "data.bin"
    path.write_bytes(b"12345")
    filesystem = LocalFileSystem()

    assert filesystem.stat_size(str(path)) == 5
    assert filesystem.stat_size(str(tmp_path / "missing")) is None
    assert filesystem.stat_size("") is None


def test_local_filesystem_cwd(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert LocalFileSystem().cwd() == str(tmp_path.resolve())
