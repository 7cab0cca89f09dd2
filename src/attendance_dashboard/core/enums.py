from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Severity of an issue in the conversion report."""

    ERROR = "error"
    WARNING = "warning"


class IssueType(str, Enum):
    """Cross-reference problems between the index and its sessions."""

    MISSING_RECORD = "missing-record"
    MISSING_MEMBER_ATTENDANCE = "missing-member-attendance"
    DURATION_MISMATCH = "duration-mismatch"


class ReportStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


class PublishState(str, Enum):
    """Where a publish run ended up."""

    IDLE = "idle"
    SWAPPED = "swapped"
    ROLLED_BACK = "rolled_back"
    PARTIALLY_SWAPPED = "partially_swapped"
