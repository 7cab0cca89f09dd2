"""Reads a freshly published dataset back the way the dashboard does.

Checks the list view (index), the member drill-down (every session the
member references), and the list -> detail -> back navigation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.exceptions import DatasetReadError
from ..storage.dataset_repository import DatasetRepository


@dataclass(frozen=True)
class VerificationResult:
    ok: bool
    data: dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"ok": self.ok}
        if self.data:
            out["data"] = self.data
        if self.error is not None:
            out["error"] = self.error
        return out


class LocalVerificationRunner:
    def __init__(self, repository: DatasetRepository):
        self._repo = repository

    def verify_dashboard(self) -> VerificationResult:
        try:
            index = self._repo.load_index()
        except DatasetReadError as e:
            return VerificationResult(ok=False, error=f"Failed to load index.json: {e}")

        warnings = []
        if not index.groups:
            warnings.append("There are no groups")
        if not index.members:
            warnings.append("There are no members")

        return VerificationResult(
            ok=True,
            data={"groupCount": len(index.groups), "memberCount": len(index.members), "warnings": warnings},
        )

    def verify_member_detail(self, member_id: str) -> VerificationResult:
        try:
            index = self._repo.load_index()
        except DatasetReadError as e:
            return VerificationResult(ok=False, error=f"Failed to load index.json: {e}")

        member = index.find_member(member_id)
        if member is None:
            return VerificationResult(ok=False, error=f"Member {member_id} is not in the index")

        warnings = []
        failed = []
        loaded = 0
        for session_id in member.record_ids:
            try:
                session = self._repo.load_session(session_id)
            except DatasetReadError:
                failed.append(session_id)
                continue
            if not any(a.member_id == member_id for a in session.attendances):
                warnings.append(f"Session {session_id} has no attendance for member {member_id}")
            loaded += 1

        if failed:
            return VerificationResult(ok=False, error=f"Failed to load session JSON: {', '.join(failed)}")

        return VerificationResult(
            ok=True,
            data={"memberId": member_id, "sessionCount": loaded, "warnings": warnings},
        )

    def verify_navigation(self) -> VerificationResult:
        steps = []
        warnings = []

        dashboard = self.verify_dashboard()
        if not dashboard.ok:
            return VerificationResult(ok=False, error=f"Dashboard check failed: {dashboard.error}")
        steps.append("dashboard")

        members = self._repo.load_index().members
        if not members:
            warnings.append("No members; skipped the member drill-down")
        else:
            detail = self.verify_member_detail(members[0].id)
            if not detail.ok:
                return VerificationResult(ok=False, error=f"Member detail check failed: {detail.error}")
            steps.append("memberDetail")

        steps.append("back")
        return VerificationResult(ok=True, data={"steps": steps, "warnings": warnings})

    def run_all(self) -> VerificationResult:
        dashboard = self.verify_dashboard()
        member_detail = self._verify_first_member_detail()
        navigation = self.verify_navigation()

        return VerificationResult(
            ok=dashboard.ok and member_detail.ok and navigation.ok,
            data={
                "dashboard": dashboard.to_dict(),
                "memberDetail": member_detail.to_dict(),
                "navigation": navigation.to_dict(),
            },
        )

    def _verify_first_member_detail(self) -> VerificationResult:
        try:
            members = self._repo.load_index().members
        except DatasetReadError as e:
            return VerificationResult(ok=False, error=f"Failed to load index.json: {e}")

        if not members:
            return VerificationResult(
                ok=True,
                data={"memberId": None, "sessionCount": 0, "warnings": ["There are no members"]},
            )
        return self.verify_member_detail(members[0].id)
