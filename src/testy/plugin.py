"""pytest integration: a ``testy`` fixture and reporting of facade failures.

Enable with ``-p testy.plugin`` or ``pytest_plugins = ["testy.plugin"]`` in a
root ``conftest.py``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from testy.cases import RecordingCase
from testy.config import FacadeConfig, load_config
from testy.facade import T, new_case
from testy.reporting.junit import CaseResult, write_junit
from testy.verbose import setup_logger

logger = logging.getLogger(__name__)

config_key = pytest.StashKey[FacadeConfig]()
results_key = pytest.StashKey[list[CaseResult]]()
facade_key = pytest.StashKey[T]()


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini("testy_config", "Path to a testy YAML config, relative to rootdir", default="")


def pytest_configure(config: pytest.Config) -> None:
    config_path = config.getini("testy_config")
    if config_path:
        facade_config = load_config(config.rootpath / config_path)
    else:
        facade_config = FacadeConfig()

    if facade_config.log_file:
        setup_logger(Path(facade_config.log_file), verbose=facade_config.verbose)

    config.stash[config_key] = facade_config
    config.stash[results_key] = []
    logger.debug(f"testy configured: {facade_config.model_dump()}")


@pytest.fixture
def testy(request: pytest.FixtureRequest) -> T:
    """A named assertion facade whose failures fail the requesting test."""
    case = RecordingCase(name=request.node.nodeid)
    facade = new_case(case, request.node.name, config=request.config.stash[config_key])
    request.node.stash[facade_key] = facade
    return facade


# outermost wrapper, so xfail handling has already marked the report
@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo):
    outcome = yield
    report = outcome.get_result()
    if report.when != "call":
        return
    facade = item.stash.get(facade_key, None)
    if facade is None:
        return

    item.config.stash[results_key].append(
        CaseResult.from_facade(item.name, facade, classname=item.nodeid.split("::")[0])
    )
    if report.passed and facade.failed():
        # an expected failure that happened: xfailed, not failed
        report.outcome = "skipped" if hasattr(report, "wasxfail") else "failed"
        report.longrepr = facade.done()


def pytest_sessionfinish(session: pytest.Session) -> None:
    facade_config = session.config.stash.get(config_key, None)
    if facade_config is None or not facade_config.junit_file:
        return
    results = session.config.stash[results_key]
    path = write_junit(Path(facade_config.junit_file), {"testy": results})
    logger.debug(f"Wrote {len(results)} case(s) to {path}")
