"""Tests for test case handles."""

import unittest

from testy import Case, Location, RecordingCase, UnittestCase, new


def test_recording_case_starts_clean():
    case = RecordingCase()
    assert not case.failed()
    assert case.reports == []


def test_recording_case_records_reports():
    case = RecordingCase(name="demo")
    case.error_at(Location("x.py", 3), "boom")

    assert case.failed()
    assert case.reports == [(Location("x.py", 3), "boom")]
    assert case.messages() == ["x.py:3: boom"]


def test_recording_case_fail_without_message():
    case = RecordingCase()
    case.fail()
    assert case.failed()
    assert case.reports == []


def test_cases_satisfy_protocol():
    assert isinstance(RecordingCase(), Case)
    assert isinstance(UnittestCase(unittest.TestCase()), Case)


def _run(test_class: type[unittest.TestCase]) -> unittest.TestResult:
    result = unittest.TestResult()
    test_class("test_it").run(result)
    return result


def test_unittest_case_reports_every_failure_once():
    class Sample(unittest.TestCase):
        def test_it(self):
            t = new(UnittestCase(self))
            t.true(False)
            t.equal(1, 2)
            t.log("still running")

    result = _run(Sample)

    assert result.testsRun == 1
    assert len(result.failures) == 1
    assert result.errors == []
    text = result.failures[0][1]
    assert "test_cases.py" in text
    assert "Expression was not true" in text
    assert "Values were not equal" in text


def test_unittest_case_passes_when_clean():
    class Sample(unittest.TestCase):
        def test_it(self):
            t = new(UnittestCase(self))
            t.true(True)
            t.log("note")

    result = _run(Sample)

    assert result.wasSuccessful()


def test_unittest_case_fail_without_message():
    class Sample(unittest.TestCase):
        def test_it(self):
            new(UnittestCase(self)).fail()

    result = _run(Sample)

    assert len(result.failures) == 1
    assert "test marked failed" in result.failures[0][1]
