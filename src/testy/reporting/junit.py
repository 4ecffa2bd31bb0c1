from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from junitparser import Failure, JUnitXml, TestCase, TestSuite

from testy.facade import T, summarize

_FAILED_RE = re.compile(r"(\d+) tests? failed$")


@dataclass
class CaseResult:
    """A finished facade, reduced to what a report needs."""

    name: str
    classname: str = ""
    fail_count: int = 0
    output: list[str] = field(default_factory=list)

    @classmethod
    def from_facade(cls, name: str, facade: T, classname: str = "") -> CaseResult:
        count = facade.fail_count()
        if count == 0 and facade.failed():
            # case was failed directly, outside the facade
            count = 1
        return cls(name=name, classname=classname, fail_count=count, output=facade.output())

    @property
    def passed(self) -> bool:
        return self.fail_count == 0

    def summary(self) -> str:
        return summarize(self.name, self.fail_count)


def write_junit(path: Path, results: dict[str, list[CaseResult]]) -> Path:
    """Write a JUnit XML file with one suite per key, return its path."""
    xml = JUnitXml()

    for suite_name, cases in results.items():
        suite = TestSuite(suite_name)
        for result in cases:
            case = TestCase(result.name)
            case.classname = result.classname or suite_name
            text = "\n".join(result.output)
            if result.passed:
                if text:
                    case.system_out = text
            else:
                failure = Failure(summarize("", result.fail_count))
                failure.text = text
                case.result = [failure]
            suite.add_testcase(case)

        # Use append (not +=) to keep one <testsuite> per key
        xml.append(suite)

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path


def read_junit(path: Path) -> dict[str, list[CaseResult]]:
    """Load results previously written by ``write_junit``.

    Cases produced by other tools are accepted too: a failure whose message
    does not state a count is taken as a single failure.
    """
    xml = JUnitXml.fromfile(str(path))
    if isinstance(xml, TestSuite):
        suites = [xml]
    else:
        suites = list(xml)

    results: dict[str, list[CaseResult]] = {}
    for suite in suites:
        cases = results.setdefault(suite.name or "", [])
        for case in suite:
            fail_count = 0
            text = case.system_out or ""
            for outcome in case.result:
                if not isinstance(outcome, Failure):
                    continue
                match = _FAILED_RE.search(outcome.message or "")
                fail_count += int(match.group(1)) if match else 1
                text = outcome.text or text
            cases.append(
                CaseResult(
                    name=case.name,
                    classname=case.classname or "",
                    fail_count=fail_count,
                    output=text.splitlines(),
                )
            )
    return results
