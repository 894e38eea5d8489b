"""Recursive listing plus batched read and write of bundles.

Per-file operations of one batch are issued together with
``asyncio.gather``; results are reassembled in compendium order no matter
which operation finishes first. The first failure aborts the batch as a
``PlatformError`` and no partial bundle is returned.
"""

from __future__ import annotations

import asyncio
import logging
import pathlib

from .bundle import Bundle
from .definition import Definition, create
from .errors import ErrorMessage, PlatformError
from .fs import DirectoryChild, EntityKind, FileSystem
from .path import Path, prepend

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "."


async def _walk(filesystem: FileSystem, root: pathlib.Path, relative: tuple[str, ...]) -> list[Definition]:
    """List ``root/relative`` and everything below it, in listing order."""
    directory = prepend(root, relative)
    try:
        children = await filesystem.list_directory(directory)
    except OSError as exc:
        raise PlatformError(directory, exc) from exc

    async def visit(child: DirectoryChild) -> list[Definition]:
        if child.kind is EntityKind.FILE:
            if child.name.startswith(HIDDEN_PREFIX):
                return []
            return [create(Path.from_parts(relative, child.name))]
        if child.kind is EntityKind.DIRECTORY:
            return await _walk(filesystem, root, (*relative, child.name))
        return []

    nested = await asyncio.gather(*(visit(child) for child in children))
    return [definition for group in nested for definition in group]


async def list_tree(filesystem: FileSystem, root: pathlib.Path | str) -> Bundle:
    """List every visible file below ``root`` into a fresh bundle.

    Definition paths are relative to ``root``, which becomes the bundle's
    reading directory. Files whose name starts with a dot are skipped, as
    is anything that is neither a regular file nor a directory.
    """
    root = pathlib.Path(root)
    definitions = await _walk(filesystem, filesystem.resolve(root), ())
    logger.debug("listed %d definitions under %s", len(definitions), root)
    return Bundle(compendium=tuple(definitions), filesystem=filesystem, reading_directory=root)


async def read(bundle: Bundle) -> Bundle:
    """Load every definition's content from the bundle's reading directory.

    Bundles without a reading directory come back unchanged.
    """
    if bundle.reading_directory is None:
        return bundle

    filesystem = bundle.filesystem
    root = filesystem.resolve(bundle.reading_directory)

    async def load(definition: Definition) -> Definition:
        absolute = prepend(root, definition.path)
        try:
            content = await filesystem.read_file(absolute)
        except OSError as exc:
            raise PlatformError(absolute, exc) from exc
        return definition.with_content(content)

    definitions = await asyncio.gather(*(load(definition) for definition in bundle.compendium))
    return bundle.replace_compendium(definitions)


async def write(destination: pathlib.Path | str, bundle: Bundle) -> Bundle:
    """Write every definition below the absolute ``destination`` directory.

    Missing parent directories are created; absent content is written as an
    empty file. Returns ``bundle`` itself, unchanged.
    """
    destination = pathlib.Path(destination)
    if not destination.is_absolute():
        raise ErrorMessage(f"destination must be an absolute path: {destination}")

    filesystem = bundle.filesystem

    async def store(definition: Definition) -> None:
        absolute = prepend(destination, definition.path)
        try:
            await filesystem.make_directory(absolute.parent)
            await filesystem.write_file(absolute, definition.content or b"")
        except OSError as exc:
            raise PlatformError(absolute, exc) from exc

    await asyncio.gather(*(store(definition) for definition in bundle.compendium))
    logger.debug("wrote %d definitions to %s", len(bundle), destination)
    return bundle


__all__ = [
    "HIDDEN_PREFIX",
    "list_tree",
    "read",
    "write",
]
