from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..core.constants import INDEX_FILENAME, SESSIONS_DIRNAME
from ..core.enums import IssueType
from .issues import Issue


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _duration(att: Mapping) -> int | float:
    value = att.get("durationSeconds", 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


class ConsistencyValidator:
    """Cross-checks the index against the session documents.

    Every group and member is checked on its own and every problem is
    reported; nothing short-circuits. A non-object index yields no issues
    here; the contract validator reports it.
    """

    def validate(self, index: Mapping[str, Any], records: Iterable[Mapping[str, Any]]) -> list[Issue]:
        if not isinstance(index, Mapping):
            return []

        by_id = {r["id"]: r for r in records or () if isinstance(r, Mapping) and isinstance(r.get("id"), str)}
        issues: list[Issue] = []

        for group in _as_list(index.get("groups")):
            if not isinstance(group, Mapping):
                continue
            computed = 0
            for rid in _as_list(group.get("recordIds")):
                record = by_id.get(rid) if isinstance(rid, str) else None
                if record is None:
                    issues.append(self._missing_record("group", group.get("id"), rid))
                    continue
                computed += sum(_duration(a) for a in _as_list(record.get("attendances")) if isinstance(a, Mapping))
            self._compare_total(issues, "group", group, computed)

        for member in _as_list(index.get("members")):
            if not isinstance(member, Mapping):
                continue
            member_id = member.get("id")
            computed = 0
            for rid in _as_list(member.get("recordIds")):
                record = by_id.get(rid) if isinstance(rid, str) else None
                if record is None:
                    issues.append(self._missing_record("member", member_id, rid))
                    continue

                own = [
                    a
                    for a in _as_list(record.get("attendances"))
                    if isinstance(a, Mapping) and a.get("memberId") == member_id
                ]
                if not own:
                    issues.append(
                        Issue(
                            file_path=f"{SESSIONS_DIRNAME}/{rid}.json",
                            issue_type=IssueType.MISSING_MEMBER_ATTENDANCE,
                            message=f"Session {rid} has no attendance for member {member_id}",
                        )
                    )
                    continue
                computed += sum(_duration(a) for a in own)
            self._compare_total(issues, "member", member, computed)

        return issues

    @staticmethod
    def _missing_record(kind: str, owner_id: Any, rid: Any) -> Issue:
        return Issue(
            file_path=INDEX_FILENAME,
            issue_type=IssueType.MISSING_RECORD,
            message=f"{kind} {owner_id} references session {rid}, which does not exist",
        )

    @staticmethod
    def _compare_total(issues: list[Issue], kind: str, summary: Mapping[str, Any], computed: int | float) -> None:
        stored = summary.get("totalDurationSeconds")
        if stored != computed:
            issues.append(
                Issue(
                    file_path=INDEX_FILENAME,
                    issue_type=IssueType.DURATION_MISMATCH,
                    message=(
                        f"{kind} {summary.get('id')} totalDurationSeconds ({stored}) "
                        f"does not match the session total ({computed})"
                    ),
                )
            )
