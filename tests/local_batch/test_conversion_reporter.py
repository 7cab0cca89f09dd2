from __future__ import annotations

import json

import pytest

from attendance_dashboard.core.enums import ReportStatus
from attendance_dashboard.local_batch.issues import Issue, error, warning
from attendance_dashboard.local_batch.publisher import AtomicPublicDataWriter, FileResult
from attendance_dashboard.local_batch.reporter import ConversionReporter
from attendance_dashboard.storage.filesystem import LocalFileSystem

OK = FileResult("index.json", True)
BAD = FileResult("sessions/s1.json", False, "disk full")


@pytest.mark.parametrize(
    "generated, results, issues, expected",
    [
        (1, [OK], [], ReportStatus.SUCCESS),
        (1, [OK], [warning("a.csv", "odd row")], ReportStatus.SUCCESS),
        (1, [OK, BAD], [], ReportStatus.PARTIAL),
        (1, [OK], [error("b.csv", "broken")], ReportStatus.PARTIAL),
        (1, [BAD], [], ReportStatus.FAILURE),
        (0, [], [], ReportStatus.FAILURE),
        (2, [], [error("index.json", "mismatch")], ReportStatus.FAILURE),
    ],
)
def test_status_derivation(generated, results, issues, expected):
    report = ConversionReporter().build_report(
        input_count=2, generated_count=generated, file_results=results, issues=issues
    )

    assert report.status is expected


def test_counts_written_and_failed_files():
    report = ConversionReporter().build_report(input_count=3, generated_count=2, file_results=[OK, OK, BAD])

    assert report.to_dict()["summary"] == {
        "inputCount": 3,
        "generatedCount": 2,
        "writtenFileCount": 2,
        "failedFileCount": 1,
    }


def test_format_lists_issues_and_failed_files():
    reporter = ConversionReporter()
    report = reporter.build_report(
        input_count=1,
        generated_count=1,
        file_results=[OK, BAD],
        issues=[
            Issue(file_path="sessions/s1.json", field_path="attendances[0].durationSeconds", message="missing"),
            warning("aggregation", "Duplicate session id: s1 already exists"),
        ],
    )

    text = reporter.format(report)

    assert text.splitlines()[0] == "=== Conversion report ==="
    assert "Status: partial" in text
    assert "[error] sessions/s1.json (attendances[0].durationSeconds): missing" in text
    assert "[warning] aggregation: Duplicate session id: s1 already exists" in text
    assert "sessions/s1.json: disk full" in text


def test_format_of_clean_report_has_no_sections():
    reporter = ConversionReporter()

    text = reporter.format(reporter.build_report(input_count=1, generated_count=1, file_results=[OK]))

    assert "--- Issues ---" not in text
    assert "--- Failed files ---" not in text


def test_save_to_file_writes_json(tmp_path):
    reporter = ConversionReporter()
    report = reporter.build_report(input_count=1, generated_count=1, file_results=[OK], issues=[warning("a.csv", "w")])
    path = tmp_path / "report.json"

    reporter.save_to_file(report, str(path))

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["status"] == "success"
    assert saved["fileResults"] == [{"path": "index.json", "ok": True}]
    assert saved["issues"] == [{"filePath": "a.csv", "message": "w", "severity": "warning"}]


class NoRenameFileSystem(LocalFileSystem):
    def replace(self, src, dst):
        raise OSError(13, "Permission denied")


def test_swap_that_publishes_nothing_is_a_failure(tmp_path, sample_index_doc, sample_records):
    published = AtomicPublicDataWriter(NoRenameFileSystem()).publish(str(tmp_path), sample_index_doc, sample_records)

    report = ConversionReporter().build_report(input_count=1, generated_count=1, file_results=published.results)

    assert report.written_file_count == 0
    assert report.failed_file_count == 2
    assert report.status is ReportStatus.FAILURE
