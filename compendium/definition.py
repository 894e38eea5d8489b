"""Domain datatype for one file-tree entry."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from .path import Path


@dataclass(frozen=True)
class Definition:
    """File-tree entry: relative path, optional content and metadata.

    ``content`` is ``None`` until the entry is read or its content is set.
    ``metadata`` is copied into a read-only mapping on construction.
    """

    path: Path
    content: bytes | None = None
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def parent_path(self) -> tuple[str, ...] | None:
        return self.path.parent()

    def with_path(self, path: Path) -> "Definition":
        return replace(self, path=path)

    def with_content(self, content: bytes | None) -> "Definition":
        return replace(self, content=content)

    def with_metadata(self, metadata: Mapping[str, object]) -> "Definition":
        return replace(self, metadata=metadata)


def create(path: Path) -> Definition:
    """Build an unread definition with empty metadata."""
    return Definition(path=path)


def fork(new_path: Path, definition: Definition) -> Definition:
    """Copy ``definition`` under ``new_path`` keeping content and metadata."""
    return definition.with_path(new_path)


__all__ = [
    "Definition",
    "create",
    "fork",
]
