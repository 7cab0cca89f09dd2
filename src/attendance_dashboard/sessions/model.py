from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class Attendance:
    """One member's time in one session."""

    member_id: str
    duration_seconds: int

    def to_dict(self) -> dict:
        return {"memberId": self.member_id, "durationSeconds": self.duration_seconds}


@dataclass(frozen=True)
class SessionRecord:
    """Domain entity: one attendance session, published as ``sessions/<id>.json``.

    Created once from one input report and never modified afterwards.
    """

    id: str
    group_id: str
    date: str
    attendances: tuple[Attendance, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "groupId": self.group_id,
            "date": self.date,
            "attendances": [a.to_dict() for a in self.attendances],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionRecord":
        return cls(
            id=str(data["id"]),
            group_id=str(data["groupId"]),
            date=str(data["date"]),
            attendances=tuple(
                Attendance(member_id=str(a["memberId"]), duration_seconds=int(a["durationSeconds"]))
                for a in data.get("attendances") or []
            ),
        )


@dataclass(frozen=True)
class MergeAttendance:
    member_id: str
    member_name: str
    duration_seconds: int

    def to_dict(self) -> dict:
        return {
            "memberId": self.member_id,
            "memberName": self.member_name,
            "durationSeconds": self.duration_seconds,
        }


@dataclass(frozen=True)
class MergeContribution:
    """Merge-ready projection of a session.

    Carries denormalized group/member names so the index can store them
    without re-reading the session files.
    """

    record_id: str
    group_id: str
    group_name: str
    date: str
    attendances: tuple[MergeAttendance, ...] = field(default_factory=tuple)

    @property
    def total_duration_seconds(self) -> int:
        return sum(a.duration_seconds for a in self.attendances)

    def to_dict(self) -> dict:
        return {
            "recordId": self.record_id,
            "groupId": self.group_id,
            "groupName": self.group_name,
            "date": self.date,
            "attendances": [a.to_dict() for a in self.attendances],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MergeContribution":
        return cls(
            record_id=str(data["recordId"]),
            group_id=str(data["groupId"]),
            group_name=str(data.get("groupName", "")),
            date=str(data.get("date", "")),
            attendances=tuple(
                MergeAttendance(
                    member_id=str(a["memberId"]),
                    member_name=str(a.get("memberName", "")),
                    duration_seconds=int(a["durationSeconds"]),
                )
                for a in data.get("attendances") or []
            ),
        )
