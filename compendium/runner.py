"""Sequential driver for ``(root, transform)`` programs."""

from __future__ import annotations

import asyncio
import logging
import pathlib
import sys
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import TextIO

from .bundle import Bundle
from .engine import list_tree
from .errors import CompendiumError
from .fs import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)

Transform = Callable[[Bundle], Awaitable[Bundle]]


@dataclass(frozen=True)
class Program:
    """A root directory to list and the transform applied to its bundle."""

    root: pathlib.Path
    transform: Transform


async def run_programs(filesystem: FileSystem, programs: Iterable[Program]) -> list[Bundle]:
    """Run ``programs`` one after another, stopping at the first failure."""
    results: list[Bundle] = []
    for program in programs:
        logger.info("running program for %s", program.root)
        listed = await list_tree(filesystem, program.root)
        results.append(await program.transform(listed))
        logger.info("finished program for %s", program.root)
    return results


def perform(
    programs: Iterable[Program],
    filesystem: FileSystem | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Run ``programs`` to completion and report the outcome.

    Returns ``0`` after printing a success line, or ``1`` after printing the
    single error that stopped the run.
    """
    if filesystem is None:
        filesystem = LocalFileSystem()
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    try:
        results = asyncio.run(run_programs(filesystem, list(programs)))
    except CompendiumError as exc:
        stderr.write(f"{exc}\n")
        return 1

    total = sum(len(result) for result in results)
    stdout.write(f"Done: {len(results)} program(s), {total} definition(s).\n")
    return 0


__all__ = [
    "Program",
    "Transform",
    "perform",
    "run_programs",
]
