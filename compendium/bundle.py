"""Bundle: an ordered compendium of definitions plus its I/O context."""

from __future__ import annotations

import pathlib
from collections.abc import Iterable
from dataclasses import dataclass, replace

from .definition import Definition
from .fs import FileSystem


@dataclass(frozen=True)
class Bundle:
    """Working unit handed from stage to stage.

    ``reading_directory`` is the root the compendium was listed from and is
    ``None`` for bundles assembled by hand.
    """

    compendium: tuple[Definition, ...]
    filesystem: FileSystem
    reading_directory: pathlib.Path | None = None

    def replace_compendium(self, definitions: Iterable[Definition]) -> "Bundle":
        return replace(self, compendium=tuple(definitions))

    def __len__(self) -> int:
        return len(self.compendium)


def bundle(filesystem: FileSystem, definitions: Iterable[Definition]) -> Bundle:
    """Wrap hand-built definitions into a bundle with no reading directory."""
    return Bundle(compendium=tuple(definitions), filesystem=filesystem, reading_directory=None)


__all__ = [
    "Bundle",
    "bundle",
]
