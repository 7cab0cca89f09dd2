from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import IssueType, Severity


@dataclass(frozen=True)
class Issue:
    """One entry of the report's issue list.

    Contract issues carry ``field_path``; consistency issues carry
    ``issue_type`` and are always errors.
    """

    file_path: str
    message: str
    severity: Severity = Severity.ERROR
    field_path: Optional[str] = None
    issue_type: Optional[IssueType] = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> dict:
        out = {"filePath": self.file_path}
        if self.field_path is not None:
            out["fieldPath"] = self.field_path
        if self.issue_type is not None:
            out["issueType"] = self.issue_type.value
        out["message"] = self.message
        out["severity"] = self.severity.value
        return out


def error(file_path: str, message: str) -> Issue:
    return Issue(file_path=file_path, message=message, severity=Severity.ERROR)


def warning(file_path: str, message: str) -> Issue:
    return Issue(file_path=file_path, message=message, severity=Severity.WARNING)


def has_errors(issues) -> bool:
    return any(i.is_error for i in issues)
