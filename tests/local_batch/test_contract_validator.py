from __future__ import annotations

import copy

import pytest

from attendance_dashboard.core.enums import Severity
from attendance_dashboard.local_batch.contract_validator import DataContractValidator


@pytest.fixture
def validator():
    return DataContractValidator()


def test_valid_documents_have_no_issues(validator, sample_index_doc, sample_records):
    assert validator.validate_index(sample_index_doc) == []
    assert validator.validate_record("sessions/g1-2026-01-15.json", sample_records[0]) == []


@pytest.mark.parametrize("doc", [None, [], "index"])
def test_non_object_index_is_one_error(validator, doc):
    issues = validator.validate_index(doc)

    assert len(issues) == 1
    assert issues[0].file_path == "index.json"
    assert issues[0].field_path == ""
    assert issues[0].severity is Severity.ERROR


def test_missing_and_mistyped_index_keys(validator, sample_index_doc):
    doc = copy.deepcopy(sample_index_doc)
    del doc["updatedAt"]
    doc["members"][1]["totalDurationSeconds"] = "1800"
    doc["groups"][0]["recordIds"] = "g1-2026-01-15"

    issues = validator.validate_index(doc)

    by_field = {i.field_path: i.message for i in issues}
    assert by_field == {
        "updatedAt": "Required key updatedAt is missing",
        "groups[0].recordIds": "groups[0].recordIds must be a list",
        "members[1].totalDurationSeconds": "members[1].totalDurationSeconds must be a number",
    }


def test_boolean_is_not_a_number(validator, sample_records):
    record = copy.deepcopy(sample_records[0])
    record["attendances"][0]["durationSeconds"] = True

    issues = validator.validate_record("sessions/x.json", record)

    assert [i.field_path for i in issues] == ["attendances[0].durationSeconds"]


def test_missing_duration_in_attendance(validator, sample_records):
    record = copy.deepcopy(sample_records[0])
    del record["attendances"][1]["durationSeconds"]

    issues = validator.validate_record("sessions/g1-2026-01-15.json", record)

    assert len(issues) == 1
    assert issues[0].file_path == "sessions/g1-2026-01-15.json"
    assert issues[0].field_path.endswith(".durationSeconds")
    assert issues[0].to_dict()["severity"] == "error"


def test_attendances_are_optional_but_must_be_a_list(validator):
    base = {"id": "s", "groupId": "g", "date": "2026-01-01"}

    assert validator.validate_record("sessions/s.json", base) == []

    issues = validator.validate_record("sessions/s.json", dict(base, attendances={"memberId": "m"}))
    assert [i.message for i in issues] == ["attendances must be a list"]


def test_non_object_record(validator):
    issues = validator.validate_record("sessions/s.json", None)

    assert len(issues) == 1
    assert issues[0].field_path == ""
