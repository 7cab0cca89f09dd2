from __future__ import annotations

from attendance_dashboard.local_batch.adapter import RecordBuilder
from attendance_dashboard.local_batch.discovery import FileRef
from attendance_dashboard.parsing.base import ParseFailure


class RecordingParser:
    def __init__(self, result):
        self.result = result
        self.sources = []

    def parse(self, source):
        self.sources.append(source)
        return self.result


def _ref(path):
    return FileRef(path=str(path), name=path.name, size_bytes=path.stat().st_size if path.exists() else 0)


def test_build_parses_file_contents(tmp_path, teams_report):
    path = tmp_path / "report1.csv"
    path.write_bytes(
        teams_report("Study", "2026/1/15 19:00:00", [("Alice", "alice@example.com", "1 時間 0 分 0 秒")])
    )

    result = RecordBuilder().build(_ref(path))

    assert result.ok
    assert result.source_name == "report1.csv"
    assert result.record["date"] == "2026-01-15"
    assert result.contribution.total_duration_seconds == 3600


def test_parser_failure_becomes_build_failure(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_bytes(b"irrelevant")
    parser = RecordingParser(ParseFailure(errors=("Not a Teams attendance report",)))

    result = RecordBuilder(parser=parser).build(_ref(path))

    assert not result.ok
    assert result.errors == ("Not a Teams attendance report",)
    assert parser.sources[0].name == "bad.csv"
    assert parser.sources[0].read_bytes() == b"irrelevant"


def test_unreadable_file_becomes_build_failure(tmp_path):
    ref = FileRef(path=str(tmp_path / "gone.csv"), name="gone.csv", size_bytes=10)
    parser = RecordingParser(None)

    result = RecordBuilder(parser=parser).build(ref)

    assert not result.ok
    assert result.errors[0].startswith("Failed to read file: gone.csv")
    assert parser.sources == []


def test_parser_warnings_pass_through(tmp_path, teams_report):
    path = tmp_path / "r.csv"
    path.write_bytes(
        teams_report(
            "Study",
            "2026/2/1 10:00:00",
            [("Alice", "alice@example.com", "10 分 0 秒"), ("Bob", "bob@example.com", "??")],
        )
    )

    result = RecordBuilder().build(_ref(path))

    assert result.ok
    assert len(result.warnings) == 1
    assert "Bob" in result.warnings[0]
