from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Union

from ..parsing.base import BytesSource, ReportParser
from ..parsing.teams_report_parser import TeamsReportParser
from ..sessions.model import MergeContribution
from ..storage.filesystem import FileSystem, LocalFileSystem
from .discovery import FileRef

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildSuccess:
    source_name: str
    record: dict[str, Any]
    contribution: MergeContribution
    warnings: tuple[str, ...] = field(default_factory=tuple)
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class BuildFailure:
    source_name: str
    errors: tuple[str, ...]
    ok: bool = field(default=False, init=False)


BuildResult = Union[BuildSuccess, BuildFailure]


class RecordBuilder:
    """Adapter: reads a local report file and hands it to the report parser.

    Parser warnings are passed through untouched.
    """

    def __init__(self, fs: FileSystem | None = None, *, parser: ReportParser | None = None):
        self._fs = fs or LocalFileSystem()
        self._parser = parser or TeamsReportParser()

    def build(self, file: FileRef) -> BuildResult:
        try:
            data = self._fs.read_bytes(file.path)
        except OSError as e:
            log.warning("Failed to read %s: %s", file.path, e)
            return BuildFailure(
                source_name=file.name,
                errors=(f"Failed to read file: {file.name} ({e.strerror or e})",),
            )

        result = self._parser.parse(BytesSource(name=file.name, data=data))
        if not result.ok:
            return BuildFailure(source_name=file.name, errors=tuple(result.errors))

        return BuildSuccess(
            source_name=file.name,
            record=result.record,
            contribution=result.contribution,
            warnings=tuple(result.warnings),
        )
