"""Command-line front door for compendium.

Lists a source tree, applies the requested transforms, and writes the
result under a destination directory.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import config, contrib
from .bundle import Bundle
from .engine import read, write
from .path import Path as DefinitionPath
from .render import highlight_renderer
from .runner import Program, Transform, perform


def _extension_pair(value: str) -> tuple[str, str]:
    """argparse type for ``OLD:NEW`` extension pairs."""
    old, separator, new = value.partition(":")
    if not separator or not old or not new:
        raise argparse.ArgumentTypeError(f"expected OLD:NEW, got {value!r}")
    return old.lstrip("."), new.lstrip(".")


def _definition_path(value: str) -> DefinitionPath:
    try:
        return DefinitionPath.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _highlight_all(bundle: Bundle, style: str) -> Bundle:
    """Highlight every definition and give it an ``html`` extension."""
    bundle = contrib.render_content(bundle, highlight_renderer(style))
    for extension in sorted({definition.path.extension for definition in bundle.compendium}):
        bundle = contrib.rename_extension(bundle, extension, "html")
    return bundle


def build_transform(
    destination: Path,
    excludes: list[DefinitionPath],
    extension_renames: list[tuple[str, str]],
    highlight_style: str | None = None,
    permalink_name: str | None = None,
    enclose_directory: str | None = None,
) -> Transform:
    """Assemble the async transform run by the CLI for one source tree."""

    async def transform(bundle: Bundle) -> Bundle:
        for path in excludes:
            bundle = contrib.exclude(bundle, path)
        bundle = await read(bundle)
        if highlight_style is not None:
            bundle = _highlight_all(bundle, highlight_style)
        for old, new in extension_renames:
            bundle = contrib.rename_extension(bundle, old, new)
        if enclose_directory:
            bundle = contrib.enclose(bundle, enclose_directory)
        if permalink_name:
            bundle = contrib.permalink(bundle, permalink_name)
        return await write(destination, bundle)

    return transform


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run one program from SOURCE to DESTINATION.

    Exits with status 1 when listing, reading or writing fails.
    """
    parser = argparse.ArgumentParser(description="Copy a file tree while renaming, filtering and rendering it.")
    parser.add_argument("source", help="Directory to list.")
    parser.add_argument("destination", help="Directory to write into.")
    parser.add_argument(
        "--exclude",
        action="append",
        type=_definition_path,
        default=[],
        metavar="PATH",
        help="Relative path to leave out (repeatable).",
    )
    parser.add_argument(
        "--rename-extension",
        action="append",
        type=_extension_pair,
        default=[],
        metavar="OLD:NEW",
        help="Change extension OLD to NEW (repeatable).",
    )
    parser.add_argument("--highlight", action="store_true", help="Render files as syntax-highlighted HTML.")
    parser.add_argument("--style", default=None, help="Pygments style name for --highlight.")
    permalink_group = parser.add_mutually_exclusive_group()
    permalink_group.add_argument("--permalink", metavar="NAME", default=None, help="Nest each file as DIR/NAME.EXT.")
    permalink_group.add_argument(
        "--no-permalink",
        action="store_true",
        help="Ignore the configured permalink name for this run.",
    )
    parser.add_argument("--enclose", metavar="DIR", default=None, help="Nest every file under DIR.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Store the given --style and --permalink (or --no-permalink) in the config.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every listed, read and written file.")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.save_defaults:
        if args.style is not None:
            config.save_highlight_style(args.style)
        if args.permalink is not None:
            config.save_permalink_name(args.permalink)
        elif args.no_permalink:
            config.save_permalink_name(None)

    if args.no_permalink:
        permalink_name = None
    else:
        permalink_name = args.permalink or config.load_permalink_name()

    destination = Path(args.destination).resolve()
    style = args.style or config.load_highlight_style()
    transform = build_transform(
        destination,
        excludes=args.exclude,
        extension_renames=args.rename_extension,
        highlight_style=style if args.highlight else None,
        permalink_name=permalink_name,
        enclose_directory=args.enclose,
    )

    status = perform([Program(root=Path(args.source), transform=transform)])
    if status:
        raise SystemExit(status)


if __name__ == "__main__":
    main()
