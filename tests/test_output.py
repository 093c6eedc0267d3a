"""
Tests for the output sink and file naming.
"""

from datetime import datetime

import pytest

from sqlexport.exceptions import OutputFileError
from sqlexport.output import FileSink, default_output_path


class TestDefaultOutputPath:
    def test_timestamped_name(self, tmp_path):
        path = default_output_path(tmp_path, "CSV", now=datetime(2023, 12, 31, 23, 59, 1))
        assert path == tmp_path.resolve() / "output_20231231_235901.csv"

    def test_empty_directory_is_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = default_output_path("", "json", now=datetime(2024, 1, 1))
        assert path.parent == tmp_path.resolve()
        assert path.name == "output_20240101_000000.json"

    def test_relative_directory_resolved(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = default_output_path("exports", "xml")
        assert path.is_absolute()
        assert path.parent == tmp_path.resolve() / "exports"


class TestFileSink:
    """Tests for FileSink.write_text()."""

    def test_creates_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "out.csv"
        written = FileSink().write_text(target, "x\n")
        assert written == target
        assert target.read_text(encoding="utf-8") == "x\n"

    def test_line_endings_preserved(self, tmp_path):
        target = tmp_path / "out.csv"
        FileSink().write_text(target, "a\nb\n")
        assert target.read_bytes() == b"a\nb\n"

    def test_utf8(self, tmp_path):
        target = tmp_path / "out.json"
        FileSink().write_text(target, "Zürich")
        assert target.read_bytes() == "Zürich".encode("utf-8")

    def test_overwrites(self, tmp_path):
        target = tmp_path / "out.txt"
        target.write_text("old")
        FileSink().write_text(target, "new")
        assert target.read_text() == "new"

    def test_unwritable_path(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(OutputFileError) as exc_info:
            FileSink().write_text(blocker / "out.csv", "x")
        assert exc_info.value.path == str(blocker / "out.csv")
