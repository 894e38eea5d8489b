"""Tests for the sequential program driver."""

from __future__ import annotations

import io
import pathlib
import unittest

from compendium import contrib
from compendium.bundle import Bundle
from compendium.engine import read, write
from compendium.path import Path
from compendium.runner import Program, perform, run_programs
from tests.memory_fs import MemoryFileSystem


class RunProgramsTests(unittest.IsolatedAsyncioTestCase):
    async def test_programs_run_strictly_in_sequence(self) -> None:
        filesystem = MemoryFileSystem({"/one/a.md": b"a", "/two/b.md": b"b"})
        events: list[str] = []

        def tracking(name: str):
            async def transform(bundle: Bundle) -> Bundle:
                events.append(f"start {name}")
                result = await read(bundle)
                events.append(f"end {name}")
                return result

            return transform

        results = await run_programs(
            filesystem,
            [
                Program(pathlib.Path("/one"), tracking("one")),
                Program(pathlib.Path("/two"), tracking("two")),
            ],
        )

        self.assertEqual(events, ["start one", "end one", "start two", "end two"])
        self.assertEqual([result.compendium[0].content for result in results], [b"a", b"b"])


class PerformTests(unittest.TestCase):
    def test_success_reports_to_stdout_and_returns_zero(self) -> None:
        filesystem = MemoryFileSystem({"/src/page.md": b"# hi"})

        async def transform(bundle: Bundle) -> Bundle:
            bundle = await read(bundle)
            bundle = contrib.rename_extension(bundle, "md", "html")
            return await write(pathlib.Path("/out"), bundle)

        stdout = io.StringIO()
        stderr = io.StringIO()
        status = perform([Program(pathlib.Path("/src"), transform)], filesystem, stdout, stderr)

        self.assertEqual(status, 0)
        self.assertIn("1 program(s), 1 definition(s)", stdout.getvalue())
        self.assertEqual(stderr.getvalue(), "")
        self.assertIn(pathlib.PurePosixPath("/out/page.html"), filesystem.files)

    def test_first_failure_stops_later_programs_and_reports_one_error(self) -> None:
        filesystem = MemoryFileSystem({"/good/a.md": b"a"})
        ran: list[pathlib.Path] = []

        async def transform(bundle: Bundle) -> Bundle:
            ran.append(bundle.reading_directory)
            return bundle

        stdout = io.StringIO()
        stderr = io.StringIO()
        status = perform(
            [
                Program(pathlib.Path("/missing"), transform),
                Program(pathlib.Path("/good"), transform),
            ],
            filesystem,
            stdout,
            stderr,
        )

        self.assertEqual(status, 1)
        self.assertEqual(ran, [])
        self.assertEqual(len(stderr.getvalue().strip().splitlines()), 1)
        self.assertIn("/missing", stderr.getvalue())
        self.assertEqual(stdout.getvalue(), "")

    def test_transform_errors_are_reported(self) -> None:
        filesystem = MemoryFileSystem({"/src/a.md": b"a"})

        async def transform(bundle: Bundle) -> Bundle:
            return await write(pathlib.Path("relative"), bundle)

        stderr = io.StringIO()
        status = perform([Program(pathlib.Path("/src"), transform)], filesystem, io.StringIO(), stderr)

        self.assertEqual(status, 1)
        self.assertIn("absolute", stderr.getvalue())

    def test_exclude_before_read_skips_missing_file(self) -> None:
        filesystem = MemoryFileSystem({"/src/a.md": b"a", "/src/b.md": b"b"})
        filesystem.fail("/src/b.md")

        async def transform(bundle: Bundle) -> Bundle:
            bundle = contrib.exclude(bundle, Path.parse("b.md"))
            return await write(pathlib.Path("/out"), await read(bundle))

        status = perform([Program(pathlib.Path("/src"), transform)], filesystem, io.StringIO(), io.StringIO())

        self.assertEqual(status, 0)
        self.assertEqual(filesystem.files[pathlib.PurePosixPath("/out/a.md")], b"a")


if __name__ == "__main__":
    unittest.main()
