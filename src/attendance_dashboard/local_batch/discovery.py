from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from ..core.constants import INPUT_EXTENSION
from ..core.exceptions import InputDirectoryError, NoInputFilesError
from ..storage.filesystem import FileSystem, LocalFileSystem

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileRef:
    path: str
    name: str
    size_bytes: int


@dataclass(frozen=True)
class DiscoveryResult:
    files: tuple[FileRef, ...]
    warnings: tuple[str, ...] = field(default_factory=tuple)


class InputDiscovery:
    """Lists the attendance reports waiting in an input directory."""

    def __init__(self, fs: FileSystem | None = None, *, extension: str = INPUT_EXTENSION):
        self._fs = fs or LocalFileSystem()
        self._extension = extension.lower()

    def list_inputs(self, input_dir: str) -> DiscoveryResult:
        """Return readable input files in name order.

        Raises:
            InputDirectoryError: the directory cannot be listed.
            NoInputFilesError: nothing usable remains after filtering.
        """
        try:
            entries = self._fs.list_dir(input_dir)
        except OSError as e:
            raise InputDirectoryError(
                f"Cannot read input directory: {input_dir} ({e.strerror or e})",
                path=input_dir,
            ) from e

        warnings: list[str] = []
        files: list[FileRef] = []

        for name in entries:
            if not name.lower().endswith(self._extension):
                continue

            path = os.path.join(input_dir, name)
            try:
                st = self._fs.stat(path)
            except OSError:
                warnings.append(f"Cannot stat file: {name}")
                continue

            if not st.is_file:
                continue

            if not self._fs.is_readable(path):
                warnings.append(f"File is not readable: {name}")
                continue

            files.append(FileRef(path=path, name=name, size_bytes=st.size_bytes))

        for w in warnings:
            log.warning(w)

        if not files:
            raise NoInputFilesError(
                f"No {self._extension} input files found: {input_dir}",
                path=input_dir,
                warnings=warnings,
            )

        log.info("Found %d input file(s) in %s", len(files), input_dir)
        return DiscoveryResult(files=tuple(files), warnings=tuple(warnings))
