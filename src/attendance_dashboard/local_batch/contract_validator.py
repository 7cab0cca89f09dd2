"""Shape checks for the published JSON documents.

Only structure and types are checked here; whether the documents agree with
each other is the consistency validator's job.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..core.constants import INDEX_FILENAME
from ..core.enums import Severity
from .issues import Issue

_MISSING = object()


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_list(value: Any) -> bool:
    return isinstance(value, list)


class DataContractValidator:
    def validate_index(self, index: Any) -> list[Issue]:
        file_path = INDEX_FILENAME
        if not isinstance(index, Mapping):
            return [self._issue(file_path, "", "Index data is null or not an object")]

        issues: list[Issue] = []
        self._check(issues, file_path, index, "groups", _is_list, "a list")
        self._check(issues, file_path, index, "members", _is_list, "a list")
        self._check(issues, file_path, index, "updatedAt", _is_str, "a string")

        for key in ("groups", "members"):
            items = index.get(key)
            if _is_list(items):
                for i, item in enumerate(items):
                    self._validate_summary(issues, file_path, f"{key}[{i}]", item)
        return issues

    def validate_record(self, path: str, record: Any) -> list[Issue]:
        if not isinstance(record, Mapping):
            return [self._issue(path, "", "Session data is null or not an object")]

        issues: list[Issue] = []
        for key in ("id", "groupId", "date"):
            self._check(issues, path, record, key, _is_str, "a string")

        attendances = record.get("attendances", _MISSING)
        if attendances is _MISSING:
            return issues
        if not _is_list(attendances):
            issues.append(self._issue(path, "attendances", "attendances must be a list"))
            return issues

        for i, att in enumerate(attendances):
            prefix = f"attendances[{i}]"
            if not isinstance(att, Mapping):
                issues.append(self._issue(path, prefix, f"{prefix} must be an object"))
                continue
            self._check(issues, path, att, "memberId", _is_str, "a string", prefix=prefix)
            self._check(issues, path, att, "durationSeconds", _is_number, "a number", prefix=prefix)
        return issues

    def _validate_summary(self, issues: list[Issue], file_path: str, prefix: str, item: Any) -> None:
        if not isinstance(item, Mapping):
            issues.append(self._issue(file_path, prefix, f"{prefix} must be an object"))
            return
        self._check(issues, file_path, item, "id", _is_str, "a string", prefix=prefix)
        self._check(issues, file_path, item, "name", _is_str, "a string", prefix=prefix)
        self._check(issues, file_path, item, "totalDurationSeconds", _is_number, "a number", prefix=prefix)
        self._check(issues, file_path, item, "recordIds", _is_list, "a list", prefix=prefix)

    def _check(self, issues, file_path, data, key, predicate, expected, *, prefix: str = "") -> None:
        field_path = f"{prefix}.{key}" if prefix else key
        value = data.get(key, _MISSING)
        if value is _MISSING:
            issues.append(self._issue(file_path, field_path, f"Required key {field_path} is missing"))
        elif not predicate(value):
            issues.append(self._issue(file_path, field_path, f"{field_path} must be {expected}"))

    @staticmethod
    def _issue(file_path: str, field_path: str, message: str) -> Issue:
        return Issue(file_path=file_path, field_path=field_path, message=message, severity=Severity.ERROR)
