from __future__ import annotations

from ..common.datetime_utils import format_duration
from ..core.exceptions import ResourceNotFoundError
from ..storage.dataset_repository import DatasetRepository


class DashboardService:
    """Read models for the dashboard views, built from the published dataset."""

    def __init__(self, repository: DatasetRepository):
        self._repo = repository

    def get_index(self) -> dict:
        index = self._repo.load_index()
        data = index.to_dict()
        for item in data["groups"] + data["members"]:
            item["totalDuration"] = format_duration(item["totalDurationSeconds"])
        return data

    def get_session(self, session_id: str) -> dict:
        index = self._repo.load_index()
        if session_id not in index.record_ids:
            raise ResourceNotFoundError(f"Session {session_id} not found")
        return self._repo.load_session(session_id).to_dict()

    def get_group_detail(self, group_id: str) -> dict:
        index = self._repo.load_index()
        group = index.find_group(group_id)
        if group is None:
            raise ResourceNotFoundError(f"Group {group_id} not found")

        sessions = []
        for sid in group.record_ids:
            s = self._repo.load_session(sid)
            total = sum(a.duration_seconds for a in s.attendances)
            sessions.append(
                {
                    "id": s.id,
                    "date": s.date,
                    "attendeeCount": len(s.attendances),
                    "totalDurationSeconds": total,
                    "totalDuration": format_duration(total),
                }
            )
        sessions.sort(key=lambda x: x["date"], reverse=True)

        data = group.to_dict()
        data["totalDuration"] = format_duration(group.total_duration_seconds)
        data["sessions"] = sessions
        return data

    def get_member_detail(self, member_id: str) -> dict:
        index = self._repo.load_index()
        member = index.find_member(member_id)
        if member is None:
            raise ResourceNotFoundError(f"Member {member_id} not found")

        group_names = {g.id: g.name for g in index.groups}
        sessions = []
        for sid in member.record_ids:
            s = self._repo.load_session(sid)
            seconds = sum(a.duration_seconds for a in s.attendances if a.member_id == member_id)
            sessions.append(
                {
                    "id": s.id,
                    "groupId": s.group_id,
                    "groupName": group_names.get(s.group_id, "-"),
                    "date": s.date,
                    "durationSeconds": seconds,
                    "duration": format_duration(seconds),
                }
            )
        sessions.sort(key=lambda x: x["date"], reverse=True)

        data = member.to_dict()
        data["totalDuration"] = format_duration(member.total_duration_seconds)
        data["sessions"] = sessions
        return data
