"""Staged, lock-protected replacement of the public dataset.

Idle -> LockAcquired -> Staged -> (Swapped | RolledBack) -> lock released.

Everything is first written into a fresh ``.staging-*`` directory inside the
output directory. Only when every staged write succeeded are the files
renamed into their public paths, so a crash before the swap leaves the public
dataset exactly as it was. A rename failing half-way through the swap is
reported as a failure; files already swapped are not reverted and every
file not yet swapped is reported as failed.
"""

from __future__ import annotations

import json
import logging
import os
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import now_utc, to_iso_timestamp
from ..core.constants import INDEX_FILENAME, LOCK_FILENAME, SESSIONS_DIRNAME, STAGING_PREFIX
from ..core.enums import PublishState
from ..core.exceptions import LockHeldError
from ..index.model import DashboardIndex
from ..storage.filesystem import FileSystem, LocalFileSystem

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileResult:
    """Outcome for one public file.

    ``ok`` is true only once the file has been renamed into its public path.
    Files that were staged but never swapped are reported as failed.
    """

    path: str
    ok: bool
    error: Optional[str] = None

    def to_dict(self) -> dict:
        out = {"path": self.path, "ok": self.ok}
        if self.error is not None:
            out["error"] = self.error
        return out


@dataclass(frozen=True)
class PublishResult:
    all_succeeded: bool
    results: tuple[FileResult, ...] = field(default_factory=tuple)
    state: PublishState = PublishState.IDLE

    def to_dict(self) -> dict:
        return {"allSucceeded": self.all_succeeded, "results": [r.to_dict() for r in self.results]}


def _to_json(document: Any) -> str:
    return json.dumps(document, ensure_ascii=False, indent=2)


def _not_swapped(staged: Iterable[FileResult], reason: str) -> tuple[FileResult, ...]:
    return tuple(r if not r.ok else FileResult(r.path, False, f"Not swapped: {reason}") for r in staged)


class AtomicPublicDataWriter:
    def __init__(self, fs: FileSystem | None = None):
        self._fs = fs or LocalFileSystem()

    def publish(
        self,
        output_dir: str,
        index: DashboardIndex | Mapping[str, Any],
        records: Iterable[Mapping[str, Any]],
    ) -> PublishResult:
        index_doc = index.to_dict() if isinstance(index, DashboardIndex) else index
        records = list(records)
        lock_path = os.path.join(output_dir, LOCK_FILENAME)

        try:
            self._fs.make_dirs(output_dir)
            self._acquire_lock(lock_path)
        except (LockHeldError, OSError) as e:
            log.error("Publish aborted: %s", e)
            return PublishResult(all_succeeded=False, results=(FileResult(lock_path, False, str(e)),))

        try:
            return self._stage_and_swap(output_dir, index_doc, records)
        finally:
            self._release_lock(lock_path)

    def _stage_and_swap(self, output_dir: str, index_doc: Any, records: list[Mapping[str, Any]]) -> PublishResult:
        staging_dir = os.path.join(output_dir, f"{STAGING_PREFIX}{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}")
        staged_sessions = os.path.join(staging_dir, SESSIONS_DIRNAME)

        try:
            try:
                self._fs.make_dirs(staged_sessions)
            except OSError as e:
                return PublishResult(
                    all_succeeded=False,
                    results=(FileResult(staging_dir, False, str(e)),),
                    state=PublishState.ROLLED_BACK,
                )

            # Stage
            staged: list[FileResult] = [self._stage(staging_dir, INDEX_FILENAME, index_doc)]
            session_paths: list[str] = []
            for record in records:
                rel = self._record_path(record)
                if rel is None:
                    staged.append(FileResult(f"{SESSIONS_DIRNAME}/{record.get('id')!s}.json", False, "Invalid session id"))
                    continue
                if rel in session_paths:
                    staged.append(FileResult(rel, False, "Duplicate session id"))
                    continue
                staged.append(self._stage(staging_dir, rel, record))
                session_paths.append(rel)

            # Gate
            if not all(r.ok for r in staged):
                log.error("Staging failed for %d file(s); public data left untouched", sum(not r.ok for r in staged))
                return PublishResult(
                    all_succeeded=False,
                    results=_not_swapped(staged, "staging failed"),
                    state=PublishState.ROLLED_BACK,
                )

            # Swap: sessions first, index last. An interrupted swap leaves the
            # previous index in place.
            public_sessions = os.path.join(output_dir, SESSIONS_DIRNAME)
            try:
                self._fs.make_dirs(public_sessions)
            except OSError as e:
                return PublishResult(
                    all_succeeded=False,
                    results=_not_swapped(staged, f"cannot create {public_sessions}: {e}"),
                    state=PublishState.ROLLED_BACK,
                )

            swapped: dict[str, FileResult] = {}
            failure: Optional[str] = None
            for rel in session_paths + [INDEX_FILENAME]:
                if failure is not None:
                    swapped[rel] = FileResult(rel, False, f"Not swapped: {failure}")
                    continue
                try:
                    self._fs.replace(os.path.join(staging_dir, rel), os.path.join(output_dir, rel))
                except OSError as e:
                    log.error("Swap failed at %s; %d earlier file(s) already replaced", rel, len(swapped))
                    failure = f"swap of {rel} failed"
                    swapped[rel] = FileResult(rel, False, f"Swap failed: {e}")
                    continue
                swapped[rel] = FileResult(rel, True)

            results = tuple(swapped[r.path] for r in staged)
            if failure is not None:
                done = sum(r.ok for r in results)
                return PublishResult(
                    all_succeeded=False,
                    results=results,
                    state=PublishState.PARTIALLY_SWAPPED if done else PublishState.ROLLED_BACK,
                )

            log.info("Published %d file(s) to %s", len(results), output_dir)
            return PublishResult(all_succeeded=True, results=results, state=PublishState.SWAPPED)
        finally:
            self._cleanup(staging_dir)

    def _stage(self, staging_dir: str, rel: str, document: Any) -> FileResult:
        try:
            self._fs.write_text(os.path.join(staging_dir, rel), _to_json(document))
        except (OSError, TypeError, ValueError) as e:
            return FileResult(rel, False, str(e))
        return FileResult(rel, True)

    @staticmethod
    def _record_path(record: Mapping[str, Any]) -> str | None:
        rid = record.get("id")
        if not isinstance(rid, str) or not rid or rid in (".", "..") or "/" in rid or os.sep in rid:
            return None
        return f"{SESSIONS_DIRNAME}/{rid}.json"

    def _acquire_lock(self, lock_path: str) -> None:
        try:
            self._fs.create_exclusive(lock_path, f"{os.getpid()} {to_iso_timestamp(now_utc())}")
        except FileExistsError as e:
            raise LockHeldError(f"Another process is running (lock file exists): {lock_path}") from e

    def _release_lock(self, lock_path: str) -> None:
        try:
            self._fs.remove_file(lock_path)
        except OSError as e:
            log.warning("Could not release lock %s: %s", lock_path, e)

    def _cleanup(self, staging_dir: str) -> None:
        if not self._fs.exists(staging_dir):
            return
        try:
            self._fs.remove_tree(staging_dir)
        except OSError as e:
            log.warning("Could not remove staging directory %s: %s", staging_dir, e)
