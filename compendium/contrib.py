"""Pure combinators over a bundle's compendium.

Each function takes the bundle first and returns a new bundle. None of
them touch the filesystem capability or the reading directory, and all
keep the relative order of the definitions they retain.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping

from .bundle import Bundle
from .definition import Definition, fork
from .path import Path, parse_directory

Step = Callable[[Bundle], Bundle]


def _map(bundle: Bundle, update: Callable[[Definition], Definition]) -> Bundle:
    return bundle.replace_compendium(update(definition) for definition in bundle.compendium)


def _keep(bundle: Bundle, predicate: Callable[[Definition], bool]) -> Bundle:
    return bundle.replace_compendium(definition for definition in bundle.compendium if predicate(definition))


def pipe(bundle: Bundle, *steps: Step) -> Bundle:
    """Apply single-argument ``steps`` to ``bundle`` left to right."""
    for step in steps:
        bundle = step(bundle)
    return bundle


def clear_metadata(bundle: Bundle) -> Bundle:
    return _map(bundle, lambda definition: definition.with_metadata({}))


def clone(bundle: Bundle, existing_path: Path, new_path: Path) -> Bundle:
    """Insert a copy at ``new_path`` right after every definition at ``existing_path``."""

    def expand() -> Iterator[Definition]:
        for definition in bundle.compendium:
            yield definition
            if definition.path == existing_path:
                yield fork(new_path, definition)

    return bundle.replace_compendium(expand())


def enclose(bundle: Bundle, directory: str) -> Bundle:
    """Nest every definition under ``directory`` as its innermost directory."""
    return _map(bundle, lambda definition: definition.with_path(definition.path.enclose(directory)))


def exclude(bundle: Bundle, path: Path) -> Bundle:
    return _keep(bundle, lambda definition: definition.path != path)


def insert_metadata(bundle: Bundle, extra: Mapping[str, object]) -> Bundle:
    """Merge ``extra`` into each definition's metadata; ``extra`` wins collisions."""
    return _map(bundle, lambda definition: definition.with_metadata({**definition.metadata, **extra}))


def permalink(bundle: Bundle, new_base_name: str) -> Bundle:
    """Turn ``dir/name.ext`` into ``dir/name/<new_base_name>.ext``.

    Definitions already called ``new_base_name`` are left alone, so applying
    this twice gives the same result as applying it once.
    """

    def update(definition: Definition) -> Definition:
        path = definition.path
        if path.base_name == new_base_name:
            return definition
        return definition.with_path(path.enclose(path.base_name).with_base_name(new_base_name))

    return _map(bundle, update)


def rename(bundle: Bundle, old_path: Path, new_path: Path) -> Bundle:
    return _map(
        bundle,
        lambda definition: fork(new_path, definition) if definition.path == old_path else definition,
    )


def rename_extension(bundle: Bundle, old_extension: str, new_extension: str) -> Bundle:
    def update(definition: Definition) -> Definition:
        if definition.path.extension != old_extension:
            return definition
        return definition.with_path(definition.path.with_extension(new_extension))

    return _map(bundle, update)


def render_content(bundle: Bundle, renderer: Callable[[Definition], bytes | None]) -> Bundle:
    """Replace each definition's content with ``renderer(definition)``."""
    return _map(bundle, lambda definition: definition.with_content(renderer(definition)))


def replace_metadata(bundle: Bundle, metadata: Mapping[str, object]) -> Bundle:
    return _map(bundle, lambda definition: definition.with_metadata(metadata))


def set_content(bundle: Bundle, content: bytes) -> Bundle:
    return _map(bundle, lambda definition: definition.with_content(bytes(content)))


def with_base_name(bundle: Bundle, base_name: str) -> Bundle:
    return _keep(bundle, lambda definition: definition.path.base_name == base_name)


def with_directory(bundle: Bundle, directory: str | tuple[str, ...]) -> Bundle:
    """Keep definitions located directly in ``directory`` (``""`` is the root)."""
    segments = parse_directory(directory)
    return _keep(bundle, lambda definition: definition.path.directory == segments)


def with_extension(bundle: Bundle, extension: str) -> Bundle:
    return _keep(bundle, lambda definition: definition.path.extension == extension)


_MISSING = object()


def with_metadata(bundle: Bundle, key: str, value: object) -> Bundle:
    """Keep definitions whose metadata has ``key`` set to ``value``."""
    return _keep(bundle, lambda definition: definition.metadata.get(key, _MISSING) == value)


__all__ = [
    "Step",
    "pipe",
    "clear_metadata",
    "clone",
    "enclose",
    "exclude",
    "insert_metadata",
    "permalink",
    "rename",
    "rename_extension",
    "render_content",
    "replace_metadata",
    "set_content",
    "with_base_name",
    "with_directory",
    "with_extension",
    "with_metadata",
]
