"""Test case handles the facade reports into."""

from __future__ import annotations

import threading
import unittest
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from testy.context import Location


@runtime_checkable
class Case(Protocol):
    """The host primitive that records pass/fail state for one test."""

    def fail(self) -> None:
        """Mark the case failed without a message."""
        ...

    def failed(self) -> bool:
        """Whether the case has been marked failed by anyone."""
        ...

    def error_at(self, location: Location, message: str) -> None:
        """Mark the case failed with a message attributed to ``location``."""
        ...


@dataclass
class RecordingCase:
    """In-memory case that keeps every report it receives.

    Attributes:
        name: Optional identifier, used by the pytest plugin (node id).
        reports: ``(location, message)`` pairs in the order received.
    """

    name: str = ""
    reports: list[tuple[Location, str]] = field(default_factory=list)
    _failed: bool = field(default=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def fail(self) -> None:
        with self._lock:
            self._failed = True

    def failed(self) -> bool:
        return self._failed

    def error_at(self, location: Location, message: str) -> None:
        with self._lock:
            self.reports.append((location, message))
            self._failed = True

    def messages(self) -> list[str]:
        return [f"{loc}: {msg}" for loc, msg in self.reports]


class UnittestCase:
    """Adapt a ``unittest.TestCase`` so checks don't stop at the first failure.

    Reports are collected while the test runs; a cleanup registered on the
    test raises a single ``failureException`` carrying all of them.
    """

    def __init__(self, test: unittest.TestCase):
        self.test = test
        self.reports: list[tuple[Location, str]] = []
        self._failed = False
        test.addCleanup(self._flush)

    def fail(self) -> None:
        self._failed = True

    def failed(self) -> bool:
        return self._failed

    def error_at(self, location: Location, message: str) -> None:
        self.reports.append((location, message))
        self._failed = True

    def _flush(self) -> None:
        if not self._failed:
            return
        lines = [f"{loc}: {msg}" for loc, msg in self.reports]
        self.test.fail("\n".join(lines) or "test marked failed")
