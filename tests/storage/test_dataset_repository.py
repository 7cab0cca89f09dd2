import pytest

from attendance_dashboard.core.exceptions import DatasetReadError
from attendance_dashboard.storage.dataset_repository import DatasetRepository


def test_load_index_and_session(published_dir):
    repo = DatasetRepository(str(published_dir))

    index = repo.load_index()
    session = repo.load_session("g1-2026-01-15")

    assert [m.id for m in index.members] == ["m1", "m2"]
    assert index.record_ids == {"g1-2026-01-15"}
    assert session.group_id == "g1"
    assert [a.duration_seconds for a in session.attendances] == [3600, 1800]


def test_invalid_json_raises(tmp_path):
    (tmp_path / "index.json").write_text("{not json")

    with pytest.raises(DatasetReadError):
        DatasetRepository(str(tmp_path)).load_index()


@pytest.mark.parametrize("session_id", ["", "..", "../index", "a/b"])
def test_session_id_cannot_leave_the_sessions_dir(published_dir, session_id):
    with pytest.raises(DatasetReadError):
        DatasetRepository(str(published_dir)).load_session(session_id)


def test_malformed_session_raises(published_dir):
    (published_dir / "sessions" / "bad.json").write_text('{"id": "bad"}')

    with pytest.raises(DatasetReadError) as exc:
        DatasetRepository(str(published_dir)).load_session("bad")

    assert "malformed" in str(exc.value)
