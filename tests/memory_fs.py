"""In-memory ``FileSystem`` double for engine and driver tests.

Listing order follows insertion order. Individual paths can be made to
fail or to answer after a delay.
"""

from __future__ import annotations

import asyncio
import errno
import pathlib
from pathlib import PurePosixPath

from compendium.fs import DirectoryChild, EntityKind, FileSystem


class MemoryFileSystem(FileSystem):
    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self.files: dict[PurePosixPath, bytes] = {}
        self.children: dict[PurePosixPath, dict[str, EntityKind]] = {PurePosixPath("/"): {}}
        self.failing: set[PurePosixPath] = set()
        self.delays: dict[PurePosixPath, float] = {}
        self.writes: list[PurePosixPath] = []
        for raw_path, content in (files or {}).items():
            self.add_file(raw_path, content)

    def _ensure_directory(self, path: PurePosixPath) -> None:
        if path in self.children:
            return
        if path.parent != path:
            self._ensure_directory(path.parent)
            self.children[path.parent].setdefault(path.name, EntityKind.DIRECTORY)
        self.children[path] = {}

    def add_file(self, raw_path: str, content: bytes = b"") -> None:
        path = PurePosixPath(raw_path)
        self._ensure_directory(path.parent)
        self.children[path.parent][path.name] = EntityKind.FILE
        self.files[path] = content

    def add_other(self, raw_path: str) -> None:
        path = PurePosixPath(raw_path)
        self._ensure_directory(path.parent)
        self.children[path.parent][path.name] = EntityKind.OTHER

    def fail(self, raw_path: str) -> None:
        self.failing.add(PurePosixPath(raw_path))

    async def _check(self, path: PurePosixPath) -> None:
        delay = self.delays.get(path)
        if delay:
            await asyncio.sleep(delay)
        if path in self.failing:
            raise PermissionError(errno.EACCES, "Permission denied", str(path))

    async def list_directory(self, path: pathlib.Path) -> list[DirectoryChild]:
        key = PurePosixPath(path)
        await self._check(key)
        if key not in self.children:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(path))
        return [DirectoryChild(name=name, kind=kind) for name, kind in self.children[key].items()]

    async def read_file(self, path: pathlib.Path) -> bytes:
        key = PurePosixPath(path)
        await self._check(key)
        if key not in self.files:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(path))
        return self.files[key]

    async def write_file(self, path: pathlib.Path, content: bytes) -> None:
        key = PurePosixPath(path)
        await self._check(key)
        if key.parent not in self.children:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(path))
        self.children[key.parent][key.name] = EntityKind.FILE
        self.files[key] = content
        self.writes.append(key)

    async def make_directory(self, path: pathlib.Path) -> None:
        key = PurePosixPath(path)
        await self._check(key)
        self._ensure_directory(key)
