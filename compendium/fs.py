"""Filesystem capability threaded through bundles.

Every I/O-performing call in the engine goes through a ``FileSystem``
instance passed explicitly by the caller. Primitives raise ``OSError`` the
way the platform does; tagging failures with paths is the engine's job.
"""

from __future__ import annotations

import abc
import asyncio
import enum
import logging
import os
import pathlib
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class EntityKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


@dataclass(frozen=True)
class DirectoryChild:
    """One directory listing row."""

    name: str
    kind: EntityKind


class FileSystem(abc.ABC):
    """Asynchronous filesystem primitives required by the engine."""

    def resolve(self, path: pathlib.Path) -> pathlib.Path:
        """Return ``path`` as seen by this filesystem's authority."""
        return path

    @abc.abstractmethod
    async def list_directory(self, path: pathlib.Path) -> list[DirectoryChild]:
        ...

    @abc.abstractmethod
    async def read_file(self, path: pathlib.Path) -> bytes:
        ...

    @abc.abstractmethod
    async def write_file(self, path: pathlib.Path, content: bytes) -> None:
        ...

    @abc.abstractmethod
    async def make_directory(self, path: pathlib.Path) -> None:
        """Create ``path`` and its parents, succeeding when it already exists."""
        ...


def _entity_kind(entry: os.DirEntry) -> EntityKind:
    """Classify a scandir entry without following symlinks."""
    try:
        if entry.is_symlink():
            return EntityKind.OTHER
        if entry.is_file(follow_symlinks=False):
            return EntityKind.FILE
        if entry.is_dir(follow_symlinks=False):
            return EntityKind.DIRECTORY
    except OSError:
        return EntityKind.OTHER
    return EntityKind.OTHER


def _scan_directory(path: pathlib.Path) -> list[DirectoryChild]:
    with os.scandir(path) as entries:
        return [DirectoryChild(name=entry.name, kind=_entity_kind(entry)) for entry in entries]


def _write_bytes(path: pathlib.Path, content: bytes) -> None:
    path.write_bytes(content)


def _make_directory(path: pathlib.Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


class LocalFileSystem(FileSystem):
    """Local disk access with blocking calls moved to worker threads.

    Relative paths are resolved against ``working_directory``, captured
    once at construction.
    """

    def __init__(self, working_directory: pathlib.Path | None = None) -> None:
        if working_directory is None:
            working_directory = pathlib.Path.cwd()
        self.working_directory = working_directory

    def resolve(self, path: pathlib.Path) -> pathlib.Path:
        if path.is_absolute():
            return path
        return self.working_directory / path

    async def list_directory(self, path: pathlib.Path) -> list[DirectoryChild]:
        logger.debug("listing %s", path)
        return await asyncio.to_thread(_scan_directory, path)

    async def read_file(self, path: pathlib.Path) -> bytes:
        logger.debug("reading %s", path)
        return await asyncio.to_thread(path.read_bytes)

    async def write_file(self, path: pathlib.Path, content: bytes) -> None:
        logger.debug("writing %d bytes to %s", len(content), path)
        await asyncio.to_thread(_write_bytes, path, content)

    async def make_directory(self, path: pathlib.Path) -> None:
        await asyncio.to_thread(_make_directory, path)


__all__ = [
    "DirectoryChild",
    "EntityKind",
    "FileSystem",
    "LocalFileSystem",
]
