"""Fluent assertion facade over a test case handle."""

from testy.cases import Case, RecordingCase, UnittestCase
from testy.compare import deep_equal
from testy.config import FacadeConfig, load_config
from testy.context import UNKNOWN_LOCATION, DiagnosticContext, Location
from testy.facade import T, new, new_case, summarize

__all__ = [
    "Case",
    "DiagnosticContext",
    "FacadeConfig",
    "Location",
    "RecordingCase",
    "T",
    "UNKNOWN_LOCATION",
    "UnittestCase",
    "deep_equal",
    "load_config",
    "new",
    "new_case",
    "summarize",
]
