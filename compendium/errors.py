"""Error types surfaced by listing, reading, writing and the driver."""

from __future__ import annotations

import pathlib


class CompendiumError(Exception):
    """Base class for every failure the pipeline reports."""


class ErrorMessage(CompendiumError):
    """Plain descriptive failure raised by the pipeline itself."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class PlatformError(CompendiumError):
    """Filesystem failure tagged with the absolute path it concerns."""

    def __init__(self, path: pathlib.Path, underlying: BaseException) -> None:
        super().__init__(path, underlying)
        self.path = path
        self.underlying = underlying

    def __str__(self) -> str:
        reason = getattr(self.underlying, "strerror", None) or str(self.underlying) or type(self.underlying).__name__
        return f"{self.path}: {reason}"


__all__ = [
    "CompendiumError",
    "ErrorMessage",
    "PlatformError",
]
