from __future__ import annotations

import pytest

from attendance_dashboard.core.exceptions import InputDirectoryError, NoInputFilesError
from attendance_dashboard.local_batch.discovery import InputDiscovery
from attendance_dashboard.storage.filesystem import LocalFileSystem


class UnreadableFileSystem(LocalFileSystem):
    def __init__(self, unreadable):
        self.unreadable = set(unreadable)

    def is_readable(self, path):
        return not any(path.endswith(name) for name in self.unreadable) and super().is_readable(path)


def test_lists_csv_files_in_name_order(tmp_path):
    (tmp_path / "b.csv").write_bytes(b"xx")
    (tmp_path / "a.CSV").write_bytes(b"x")
    (tmp_path / "notes.txt").write_text("ignored")
    (tmp_path / "dir.csv").mkdir()

    result = InputDiscovery().list_inputs(str(tmp_path))

    assert [f.name for f in result.files] == ["a.CSV", "b.csv"]
    assert [f.size_bytes for f in result.files] == [1, 2]
    assert result.files[0].path == str(tmp_path / "a.CSV")
    assert result.warnings == ()


def test_unreadable_file_is_skipped_with_warning(tmp_path):
    (tmp_path / "ok.csv").write_bytes(b"x")
    (tmp_path / "locked.csv").write_bytes(b"x")

    result = InputDiscovery(UnreadableFileSystem(["locked.csv"])).list_inputs(str(tmp_path))

    assert [f.name for f in result.files] == ["ok.csv"]
    assert result.warnings == ("File is not readable: locked.csv",)


def test_missing_directory_raises(tmp_path):
    missing = tmp_path / "nope"

    with pytest.raises(InputDirectoryError) as exc:
        InputDiscovery().list_inputs(str(missing))

    assert exc.value.path == str(missing)
    assert "Cannot read input directory" in str(exc.value)


def test_no_matching_files_raises_with_warnings(tmp_path):
    (tmp_path / "locked.csv").write_bytes(b"x")
    (tmp_path / "readme.md").write_text("hi")

    with pytest.raises(NoInputFilesError) as exc:
        InputDiscovery(UnreadableFileSystem(["locked.csv"])).list_inputs(str(tmp_path))

    assert exc.value.warnings == ["File is not readable: locked.csv"]


def test_custom_extension(tmp_path):
    (tmp_path / "a.tsv").write_bytes(b"x")
    (tmp_path / "b.csv").write_bytes(b"x")

    result = InputDiscovery(extension=".tsv").list_inputs(str(tmp_path))

    assert [f.name for f in result.files] == ["a.tsv"]
