from __future__ import annotations

import json
import os
from typing import Any

from ..core.constants import INDEX_FILENAME, SESSIONS_DIRNAME
from ..core.exceptions import DatasetReadError
from ..index.model import DashboardIndex
from ..sessions.model import SessionRecord
from .filesystem import FileSystem, LocalFileSystem


class DatasetRepository:
    """Read access to a published dataset directory."""

    def __init__(self, data_dir: str, fs: FileSystem | None = None):
        self._data_dir = data_dir
        self._fs = fs or LocalFileSystem()

    @property
    def data_dir(self) -> str:
        return self._data_dir

    def load_index(self) -> DashboardIndex:
        data = self._read_json(os.path.join(self._data_dir, INDEX_FILENAME))
        try:
            return DashboardIndex.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DatasetReadError(f"{INDEX_FILENAME} is malformed: {e}") from e

    def load_session(self, session_id: str) -> SessionRecord:
        if not session_id or "/" in session_id or os.sep in session_id or session_id in (".", ".."):
            raise DatasetReadError(f"Invalid session id: {session_id!r}")

        rel = f"{SESSIONS_DIRNAME}/{session_id}.json"
        data = self._read_json(os.path.join(self._data_dir, SESSIONS_DIRNAME, f"{session_id}.json"))
        try:
            return SessionRecord.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DatasetReadError(f"{rel} is malformed: {e}") from e

    def _read_json(self, path: str) -> Any:
        try:
            raw = self._fs.read_bytes(path)
        except OSError as e:
            raise DatasetReadError(f"Cannot read {path} ({e.strerror or e})") from e
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DatasetReadError(f"{path} is not valid JSON: {e}") from e
