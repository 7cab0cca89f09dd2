from __future__ import annotations

from datetime import datetime, timezone

from attendance_dashboard.index.merger import IndexMerger
from attendance_dashboard.local_batch.adapter import BuildSuccess
from attendance_dashboard.local_batch.aggregation import SessionAggregationService
from attendance_dashboard.sessions.model import MergeAttendance, MergeContribution


def _parsed(record_id, name, attendances):
    return BuildSuccess(
        source_name=name,
        record={
            "id": record_id,
            "groupId": "G",
            "date": record_id[-10:],
            "attendances": [{"memberId": m, "durationSeconds": d} for m, _, d in attendances],
        },
        contribution=MergeContribution(
            record_id=record_id,
            group_id="G",
            group_name="Study",
            date=record_id[-10:],
            attendances=tuple(MergeAttendance(member_id=m, member_name=n, duration_seconds=d) for m, n, d in attendances),
        ),
    )


def _service():
    return SessionAggregationService(IndexMerger(clock=lambda: datetime(2026, 1, 1, tzinfo=timezone.utc)))


def test_aggregate_sums_sessions_in_order():
    s1 = _parsed("G-2026-01-15", "report1.csv", [("m1", "Alice", 3600), ("m2", "Bob", 1800)])
    s2 = _parsed("G-2026-01-22", "report2.csv", [("m1", "Alice", 2700)])

    result = _service().aggregate([s1, s2])

    group = result.index.groups[0]
    assert group.total_duration_seconds == 8100
    assert group.record_ids == ("G-2026-01-15", "G-2026-01-22")
    assert {m.id: m.total_duration_seconds for m in result.index.members} == {"m1": 6300, "m2": 1800}
    assert [r["id"] for r in result.records] == ["G-2026-01-15", "G-2026-01-22"]
    assert result.warnings == ()


def test_duplicate_session_is_dropped_and_first_wins():
    first = _parsed("G-2026-01-15", "report1.csv", [("m1", "Alice", 3600)])
    again = _parsed("G-2026-01-15", "copy.csv", [("m1", "Alice", 60)])

    result = _service().aggregate([first, again])
    only_first = _service().aggregate([first])

    assert result.index == only_first.index
    assert result.records == (first.record,)
    assert len(result.warnings) == 1


def test_aggregate_of_nothing_is_the_empty_index():
    result = _service().aggregate([])

    assert result.index.to_dict() == {"groups": [], "members": [], "updatedAt": ""}
    assert result.records == ()
