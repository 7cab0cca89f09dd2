from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence


@dataclass(frozen=True)
class EntryStat:
    is_file: bool
    size_bytes: int


class FileSystem(Protocol):
    """The filesystem operations the local batch pipeline relies on."""

    def list_dir(self, path: str) -> Sequence[str]:
        raise NotImplementedError

    def stat(self, path: str) -> EntryStat:
        raise NotImplementedError

    def is_readable(self, path: str) -> bool:
        raise NotImplementedError

    def read_bytes(self, path: str) -> bytes:
        raise NotImplementedError

    def exists(self, path: str) -> bool:
        raise NotImplementedError

    def make_dirs(self, path: str) -> None:
        raise NotImplementedError

    def write_text(self, path: str, content: str) -> None:
        raise NotImplementedError

    def replace(self, src: str, dst: str) -> None:
        """Rename ``src`` over ``dst``; atomic within one filesystem."""

        raise NotImplementedError

    def create_exclusive(self, path: str, content: str) -> None:
        """Create ``path``; raise FileExistsError if it is already there."""

        raise NotImplementedError

    def remove_file(self, path: str) -> None:
        raise NotImplementedError

    def remove_tree(self, path: str) -> None:
        raise NotImplementedError


class LocalFileSystem:
    def list_dir(self, path: str) -> Sequence[str]:
        return sorted(os.listdir(path))

    def stat(self, path: str) -> EntryStat:
        st = os.stat(path)
        return EntryStat(is_file=Path(path).is_file(), size_bytes=int(st.st_size))

    def is_readable(self, path: str) -> bool:
        return os.access(path, os.R_OK)

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def make_dirs(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)

    def write_text(self, path: str, content: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)

    def replace(self, src: str, dst: str) -> None:
        os.replace(src, dst)

    def create_exclusive(self, path: str, content: str) -> None:
        fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)

    def remove_file(self, path: str) -> None:
        os.remove(path)

    def remove_tree(self, path: str) -> None:
        shutil.rmtree(path)
