"""Public package surface for compendium.

Re-exports the definition/bundle model, the listing, read and write
engine, and the sequential program driver. Combinators live in
``compendium.contrib``.
"""

from __future__ import annotations

from .bundle import Bundle, bundle
from .definition import Definition, create, fork
from .engine import list_tree, read, write
from .errors import CompendiumError, ErrorMessage, PlatformError
from .fs import DirectoryChild, EntityKind, FileSystem, LocalFileSystem
from .path import Path, prepend
from .runner import Program, perform, run_programs


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "Bundle",
    "CompendiumError",
    "Definition",
    "DirectoryChild",
    "EntityKind",
    "ErrorMessage",
    "FileSystem",
    "LocalFileSystem",
    "Path",
    "PlatformError",
    "Program",
    "bundle",
    "create",
    "fork",
    "list_tree",
    "main",
    "perform",
    "prepend",
    "read",
    "run_programs",
    "write",
]
