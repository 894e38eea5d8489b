"""Segmented relative paths for definitions.

A definition path is a directory (tuple of segments), a base name and an
extension. Absolute filesystem locations stay ``pathlib.Path`` values and
are only produced by ``prepend``.
"""

from __future__ import annotations

import pathlib
from dataclasses import dataclass, replace


def parse_directory(directory: str | tuple[str, ...]) -> tuple[str, ...]:
    """Normalize a ``/``-separated string or segment tuple to segments."""
    if isinstance(directory, tuple):
        return tuple(segment for segment in directory if segment)
    return tuple(segment for segment in directory.replace("\\", "/").split("/") if segment and segment != ".")


def split_file_name(file_name: str) -> tuple[str, str]:
    """Split ``file_name`` into ``(base_name, extension)``.

    Only the last dot separates the extension. A leading or trailing dot
    belongs to the base name, so the name always rebuilds unchanged.
    """
    index = file_name.rfind(".")
    if index <= 0 or index == len(file_name) - 1:
        return file_name, ""
    return file_name[:index], file_name[index + 1 :]


@dataclass(frozen=True)
class Path:
    """Relative path of one definition."""

    directory: tuple[str, ...]
    base_name: str
    extension: str = ""

    @classmethod
    def parse(cls, raw: str) -> "Path":
        """Build a path from ``dir/sub/name.ext`` text."""
        segments = parse_directory(raw)
        if not segments:
            raise ValueError(f"path has no file name: {raw!r}")
        base_name, extension = split_file_name(segments[-1])
        return cls(directory=segments[:-1], base_name=base_name, extension=extension)

    @classmethod
    def from_parts(cls, directory: str | tuple[str, ...], file_name: str) -> "Path":
        base_name, extension = split_file_name(file_name)
        return cls(directory=parse_directory(directory), base_name=base_name, extension=extension)

    @property
    def file_name(self) -> str:
        if not self.extension:
            return self.base_name
        return f"{self.base_name}.{self.extension}"

    @property
    def segments(self) -> tuple[str, ...]:
        return (*self.directory, self.file_name)

    def parent(self) -> tuple[str, ...] | None:
        """Return the directory segments, or ``None`` at the root."""
        return self.directory or None

    def with_directory(self, directory: str | tuple[str, ...]) -> "Path":
        return replace(self, directory=parse_directory(directory))

    def with_base_name(self, base_name: str) -> "Path":
        return replace(self, base_name=base_name)

    def with_extension(self, extension: str) -> "Path":
        return replace(self, extension=extension.lstrip("."))

    def enclose(self, segment: str) -> "Path":
        """Nest the file one level deeper, under ``segment``."""
        return replace(self, directory=(*self.directory, *parse_directory(segment)))

    def path_to_root(self) -> str:
        """Relative prefix leading from this path's directory back to the root."""
        return "../" * len(self.directory)

    def as_posix(self) -> str:
        return "/".join(self.segments)

    def __str__(self) -> str:
        return self.as_posix()


def prepend(root: pathlib.Path, path: Path | tuple[str, ...]) -> pathlib.Path:
    """Join a relative definition path (or directory segments) onto ``root``."""
    segments = path.segments if isinstance(path, Path) else path
    return root.joinpath(*segments)


__all__ = [
    "Path",
    "parse_directory",
    "prepend",
    "split_file_name",
]
