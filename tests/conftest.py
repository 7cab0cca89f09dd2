from __future__ import annotations

import json

import pytest

PARTICIPANT_HEADER = "名前\t初めて参加した時刻\t最後に退出した時刻\t会議の長さ\tメール アドレス\t参加者 ID (UPN)\tロール"


def build_teams_report(title: str, start_time: str, participants) -> bytes:
    """UTF-16LE Teams attendance report with the Japanese section labels."""
    lines = [
        "1. 要約",
        f"会議のタイトル\t{title}",
        "出席者数\t{0}".format(len(participants)),
        f"開始時刻\t{start_time}",
        "",
        "2. 参加者",
        PARTICIPANT_HEADER,
    ]
    for name, email, duration in participants:
        lines.append(f"{name}\t{start_time}\t{start_time}\t{duration}\t{email}\t{email}\t出席者")
    lines += ["", "3. 会議中のアクティビティ", "名前\t参加時刻\t退出時刻\t期間"]
    return ("\ufeff" + "\r\n".join(lines)).encode("utf-16-le")


@pytest.fixture
def teams_report():
    return build_teams_report


@pytest.fixture
def sample_index_doc():
    return {
        "groups": [
            {"id": "g1", "name": "Study", "totalDurationSeconds": 5400, "recordIds": ["g1-2026-01-15"]},
        ],
        "members": [
            {"id": "m1", "name": "Alice", "totalDurationSeconds": 3600, "recordIds": ["g1-2026-01-15"]},
            {"id": "m2", "name": "Bob", "totalDurationSeconds": 1800, "recordIds": ["g1-2026-01-15"]},
        ],
        "updatedAt": "2026-02-06T03:00:00.000Z",
    }


@pytest.fixture
def sample_records():
    return [
        {
            "id": "g1-2026-01-15",
            "groupId": "g1",
            "date": "2026-01-15",
            "attendances": [
                {"memberId": "m1", "durationSeconds": 3600},
                {"memberId": "m2", "durationSeconds": 1800},
            ],
        }
    ]


@pytest.fixture
def published_dir(tmp_path, sample_index_doc, sample_records):
    """A dataset directory laid out the way the publisher writes it."""
    out = tmp_path / "public"
    (out / "sessions").mkdir(parents=True)
    (out / "index.json").write_text(json.dumps(sample_index_doc), encoding="utf-8")
    for record in sample_records:
        (out / "sessions" / f"{record['id']}.json").write_text(json.dumps(record), encoding="utf-8")
    return out
