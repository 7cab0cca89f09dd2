from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Union

from ..sessions.model import MergeContribution


@dataclass(frozen=True)
class BytesSource:
    """Named, byte-readable source handed to a report parser."""

    name: str
    data: bytes

    def read_bytes(self) -> bytes:
        return self.data


@dataclass(frozen=True)
class ParseSuccess:
    record: dict[str, Any]
    contribution: MergeContribution
    warnings: tuple[str, ...] = field(default_factory=tuple)
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class ParseFailure:
    errors: tuple[str, ...]
    ok: bool = field(default=False, init=False)


ParseResult = Union[ParseSuccess, ParseFailure]


class ReportParser(Protocol):
    def parse(self, source: BytesSource) -> ParseResult:
        raise NotImplementedError
