from __future__ import annotations

from dataclasses import dataclass, field, replace

from ..common.datetime_utils import Clock, now_utc, to_iso_timestamp
from ..sessions.model import MergeContribution
from .model import DashboardIndex, GroupSummary, MemberSummary


@dataclass(frozen=True)
class MergeResult:
    index: DashboardIndex
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_duplicate(self) -> bool:
        return bool(self.warnings)


class IndexMerger:
    """Folds one session contribution into the dashboard index.

    The input index is never modified: every merge returns a new
    ``DashboardIndex`` built from fresh summary objects.
    """

    def __init__(self, *, clock: Clock | None = None):
        self._clock = clock or now_utc

    def merge(self, current: DashboardIndex, contribution: MergeContribution) -> MergeResult:
        if contribution.record_id in current.record_ids:
            return MergeResult(
                index=replace(current, groups=tuple(current.groups), members=tuple(current.members)),
                warnings=(f"Duplicate session id: {contribution.record_id} already exists",),
            )

        groups = self._merge_group(current.groups, contribution)
        members = self._merge_members(current.members, contribution)

        return MergeResult(
            index=DashboardIndex(
                groups=groups,
                members=members,
                updated_at=to_iso_timestamp(self._clock()),
            )
        )

    @staticmethod
    def _merge_group(groups: tuple[GroupSummary, ...], contribution: MergeContribution) -> tuple[GroupSummary, ...]:
        total = contribution.total_duration_seconds
        out = list(groups)
        for i, g in enumerate(out):
            if g.id == contribution.group_id:
                out[i] = replace(
                    g,
                    total_duration_seconds=g.total_duration_seconds + total,
                    record_ids=g.record_ids + (contribution.record_id,),
                )
                return tuple(out)

        out.append(
            GroupSummary(
                id=contribution.group_id,
                name=contribution.group_name,
                total_duration_seconds=total,
                record_ids=(contribution.record_id,),
            )
        )
        return tuple(out)

    @staticmethod
    def _merge_members(members: tuple[MemberSummary, ...], contribution: MergeContribution) -> tuple[MemberSummary, ...]:
        out = list(members)
        positions = {m.id: i for i, m in enumerate(out)}
        record_id = contribution.record_id

        for att in contribution.attendances:
            pos = positions.get(att.member_id)
            if pos is None:
                positions[att.member_id] = len(out)
                out.append(
                    MemberSummary(
                        id=att.member_id,
                        name=att.member_name,
                        total_duration_seconds=att.duration_seconds,
                        record_ids=(record_id,),
                    )
                )
                continue

            m = out[pos]
            # A member listed twice in one report still references the session once.
            record_ids = m.record_ids if record_id in m.record_ids else m.record_ids + (record_id,)
            out[pos] = replace(
                m,
                total_duration_seconds=m.total_duration_seconds + att.duration_seconds,
                record_ids=record_ids,
            )
        return tuple(out)
