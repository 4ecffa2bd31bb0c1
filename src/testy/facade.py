"""The assertion facade.

A ``T`` wraps a test case handle. Checks that fail are written to a shared
output buffer as ``file:line: message`` and forwarded to the case; checks
that pass do nothing.

``uplevel`` and ``label`` return new facades that share the case, failure
count and output buffer with their parent but carry their own diagnostic
context. A helper wrapping assertions does::

    def check_even(t, n):
        t = t.uplevel(1).label("Testing", n)
        if n % 2:
            t.error("Value is not even")

and failures are attributed to the line that called ``check_even``.
"""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from testy.cases import Case
from testy.compare import deep_equal, describe, join_parts, safe_repr, sprintf
from testy.config import FacadeConfig
from testy.context import DiagnosticContext, Location, caller_location

logger = logging.getLogger(__name__)


@dataclass
class Ledger:
    """Bookkeeping shared by every facade derived from one root."""

    name: str | None = None
    config: FacadeConfig = field(default_factory=FacadeConfig)
    fail_count: int = 0
    lines: list[str] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record(self, location: Location, message: str, failure: bool) -> None:
        with self.lock:
            self.lines.append(f"{location}: {message}")
            if failure:
                self.fail_count += 1

    def count_failure(self) -> None:
        with self.lock:
            self.fail_count += 1

    def snapshot(self) -> list[str]:
        with self.lock:
            return list(self.lines)


def summarize(name: str | None, fail_count: int) -> str:
    if fail_count == 0:
        status = "all tests passed"
    elif fail_count == 1:
        status = "1 test failed"
    else:
        status = f"{fail_count} tests failed"
    return f"{name}: {status}" if name else status


class T:
    """Assertion facade over a test case handle."""

    def __init__(self, case: Case, name: str | None = None, *, config: FacadeConfig | None = None):
        self._case = case
        self._ledger = Ledger(name=name, config=config or FacadeConfig())
        self._context = DiagnosticContext()

    def __repr__(self) -> str:
        return (
            f"T(name={self._ledger.name!r}, skip={self._context.skip}, "
            f"label={self._context.label!r}, fail_count={self._ledger.fail_count})"
        )

    @property
    def name(self) -> str | None:
        return self._ledger.name

    @property
    def context(self) -> DiagnosticContext:
        return self._context

    # -- derivation --

    def _derive(self, context: DiagnosticContext) -> T:
        child = copy.copy(self)
        child._context = context
        return child

    def uplevel(self, n: int) -> T:
        """Attribute failures ``n`` more frames up the stack."""
        return self._derive(self._context.uplevel(n))

    def label(self, prefix: Any, *values: Any) -> T:
        """Prefix every message from the returned facade with ``prefix values...: ``."""
        return self._derive(self._context.with_label(join_parts(prefix, *values)))

    # -- reporting internals --

    def _where(self) -> Location:
        # +1 steps over the public method that called us
        return caller_location(self._context.skip + 1, full_path=self._ledger.config.full_paths)

    def _report(self, location: Location, body: str) -> None:
        message = self._context.decorate(body)
        self._ledger.record(location, message, failure=True)
        logger.debug(f"FAIL {location}: {message}")
        self._case.error_at(location, message)

    def _note(self, location: Location, body: str) -> None:
        message = self._context.decorate(body)
        self._ledger.record(location, message, failure=False)
        logger.debug(f"LOG {location}: {message}")

    def _detail(self, label: str, text: str) -> str:
        return f"{' ' * self._ledger.config.indent}{label}: {text}"

    # -- checks --

    def true(self, cond: Any) -> None:
        if not cond:
            self._report(self._where(), "Expression was not true")

    def false(self, cond: Any) -> None:
        if cond:
            self._report(self._where(), "Expression was not false")

    def equal(self, got: Any, want: Any) -> None:
        if not deep_equal(got, want):
            body = "\n".join([
                "Values were not equal",
                self._detail("Got", describe(got)),
                self._detail("Wanted", describe(want)),
            ])
            self._report(self._where(), body)

    def unequal(self, got: Any, other: Any) -> None:
        if deep_equal(got, other):
            body = "\n".join([
                "Values were not unequal",
                self._detail("Got", safe_repr(got)),
            ])
            self._report(self._where(), body)

    def error(self, *parts: Any) -> None:
        self._report(self._where(), join_parts(*parts))

    def errorf(self, fmt: str, *args: Any) -> None:
        self._report(self._where(), sprintf(fmt, *args))

    def log(self, *parts: Any) -> None:
        self._note(self._where(), join_parts(*parts))

    def logf(self, fmt: str, *args: Any) -> None:
        self._note(self._where(), sprintf(fmt, *args))

    def fail(self) -> None:
        """Mark the case failed without recording a message."""
        self._ledger.count_failure()
        logger.debug("FAIL (no message)")
        self._case.fail()

    # -- state --

    def fail_count(self) -> int:
        return self._ledger.fail_count

    def failed(self) -> bool:
        """True if any check failed, or the case was failed by other code."""
        return self._ledger.fail_count > 0 or self._case.failed()

    def output(self) -> list[str]:
        return self._ledger.snapshot()

    def done(self) -> str:
        """Summary line followed by every buffered entry.

        Cumulative: calling it again reflects everything recorded so far.
        """
        return "\n".join([summarize(self._ledger.name, self.fail_count()), *self.output()])


def new(case: Case, *, config: FacadeConfig | None = None) -> T:
    return T(case, config=config)


def new_case(case: Case, name: str, *, config: FacadeConfig | None = None) -> T:
    return T(case, name, config=config)
