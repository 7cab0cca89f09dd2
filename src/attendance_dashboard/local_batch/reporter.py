from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Iterable

from ..core.enums import ReportStatus
from ..storage.filesystem import FileSystem, LocalFileSystem
from .issues import Issue, has_errors
from .publisher import FileResult


@dataclass(frozen=True)
class ConversionReport:
    status: ReportStatus
    input_count: int
    generated_count: int
    written_file_count: int
    failed_file_count: int
    file_results: tuple[FileResult, ...] = field(default_factory=tuple)
    issues: tuple[Issue, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "summary": {
                "inputCount": self.input_count,
                "generatedCount": self.generated_count,
                "writtenFileCount": self.written_file_count,
                "failedFileCount": self.failed_file_count,
            },
            "fileResults": [r.to_dict() for r in self.file_results],
            "issues": [i.to_dict() for i in self.issues],
        }


class ConversionReporter:
    def __init__(self, fs: FileSystem | None = None):
        self._fs = fs or LocalFileSystem()

    def build_report(
        self,
        *,
        input_count: int,
        generated_count: int,
        file_results: Iterable[FileResult] = (),
        issues: Iterable[Issue] = (),
    ) -> ConversionReport:
        file_results = tuple(file_results)
        issues = tuple(issues)

        written = sum(1 for r in file_results if r.ok)
        failed = len(file_results) - written

        if not has_errors(issues) and failed == 0 and generated_count > 0:
            status = ReportStatus.SUCCESS
        elif written > 0:
            status = ReportStatus.PARTIAL
        else:
            status = ReportStatus.FAILURE

        return ConversionReport(
            status=status,
            input_count=input_count,
            generated_count=generated_count,
            written_file_count=written,
            failed_file_count=failed,
            file_results=file_results,
            issues=issues,
        )

    def format(self, report: ConversionReport) -> str:
        lines = [
            "=== Conversion report ===",
            f"Status: {report.status.value}",
            f"Input files: {report.input_count}",
            f"Generated sessions: {report.generated_count}",
            f"Written files: {report.written_file_count}",
            f"Failed files: {report.failed_file_count}",
        ]

        if report.issues:
            lines += ["", "--- Issues ---"]
            for issue in report.issues:
                where = f"{issue.file_path} ({issue.field_path})" if issue.field_path else issue.file_path
                lines.append(f"  [{issue.severity.value}] {where}: {issue.message}")

        failed = [r for r in report.file_results if not r.ok]
        if failed:
            lines += ["", "--- Failed files ---"]
            for r in failed:
                lines.append(f"  {r.path}: {r.error}")

        return "\n".join(lines)

    def save_to_file(self, report: ConversionReport, file_path: str) -> None:
        self._fs.write_text(file_path, json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
