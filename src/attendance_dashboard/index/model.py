from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class GroupSummary:
    """Per-group totals across every session in the index."""

    id: str
    name: str
    total_duration_seconds: int = 0
    record_ids: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "totalDurationSeconds": self.total_duration_seconds,
            "recordIds": list(self.record_ids),
        }


@dataclass(frozen=True)
class MemberSummary:
    """Per-member totals across groups."""

    id: str
    name: str
    total_duration_seconds: int = 0
    record_ids: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "totalDurationSeconds": self.total_duration_seconds,
            "recordIds": list(self.record_ids),
        }


@dataclass(frozen=True)
class DashboardIndex:
    """Aggregate root of the published dataset (``index.json``)."""

    groups: tuple[GroupSummary, ...] = field(default_factory=tuple)
    members: tuple[MemberSummary, ...] = field(default_factory=tuple)
    updated_at: str = ""

    @classmethod
    def empty(cls) -> "DashboardIndex":
        return cls()

    @property
    def record_ids(self) -> set[str]:
        return {rid for g in self.groups for rid in g.record_ids}

    def find_group(self, group_id: str) -> GroupSummary | None:
        return next((g for g in self.groups if g.id == group_id), None)

    def find_member(self, member_id: str) -> MemberSummary | None:
        return next((m for m in self.members if m.id == member_id), None)

    def to_dict(self) -> dict:
        return {
            "groups": [g.to_dict() for g in self.groups],
            "members": [m.to_dict() for m in self.members],
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DashboardIndex":
        def _summary(kind, item):
            return kind(
                id=str(item["id"]),
                name=str(item.get("name", "")),
                total_duration_seconds=int(item.get("totalDurationSeconds", 0)),
                record_ids=tuple(str(r) for r in item.get("recordIds") or []),
            )

        return cls(
            groups=tuple(_summary(GroupSummary, g) for g in data.get("groups") or []),
            members=tuple(_summary(MemberSummary, m) for m in data.get("members") or []),
            updated_at=str(data.get("updatedAt", "")),
        )
