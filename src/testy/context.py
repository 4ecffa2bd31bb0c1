"""Diagnostic context: which call site a failure belongs to, and its label."""

from __future__ import annotations

import inspect
import os
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Location:
    """A source position, rendered as ``file:line``."""

    filename: str
    lineno: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.lineno}"


UNKNOWN_LOCATION = Location("???", 1)


def caller_location(skip: int, full_path: bool = False) -> Location:
    """Return the location ``skip`` frames above the function calling this one.

    ``skip=0`` is the calling function itself, ``skip=1`` its caller, and so
    on. Falls back to ``UNKNOWN_LOCATION`` when the stack is too shallow or
    the interpreter does not expose frames.
    """
    frame = inspect.currentframe()
    try:
        # frame is caller_location itself; one more hop reaches the caller
        for _ in range(skip + 1):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            return UNKNOWN_LOCATION
        filename = frame.f_code.co_filename
        if not full_path:
            filename = os.path.basename(filename)
        return Location(filename, frame.f_lineno)
    finally:
        del frame


@dataclass(frozen=True)
class DiagnosticContext:
    """Immutable pair of stack skip depth and optional message label.

    The default depth of 1 attributes failures to whoever called the
    assertion method rather than to the method itself.
    """

    skip: int = 1
    label: str | None = None

    def uplevel(self, n: int) -> DiagnosticContext:
        if n < 0:
            raise ValueError(f"uplevel depth must be non-negative, got {n}")
        return replace(self, skip=self.skip + n)

    def with_label(self, text: str) -> DiagnosticContext:
        return replace(self, label=text)

    def decorate(self, message: str) -> str:
        if self.label:
            return f"{self.label}: {message}"
        return message
