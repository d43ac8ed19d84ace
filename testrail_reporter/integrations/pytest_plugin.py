"""
pytest plugin - reports test results to TestRail.

Link a test to TestRail with a marker:

    @pytest.mark.testrail(suite_id=3, case_id=42)
    def test_checkout():
        ...

The plugin is disabled unless a version is configured (``--testrail-version``,
``TESTRAIL_VERSION`` or ``version`` in the YAML config).
"""
from typing import Any, Dict, Optional

import pytest

from ..core.config import TestRailConfig
from ..core.domain.events import FailureInfo, ReportState, TestEvent
from ..core.exceptions import ConfigurationError
from ..core.services.metrics import get_logger
from ..core.services.result_reporter import CASE_ID_PARAM, SUITE_ID_PARAM, ResultReporter
from ..infrastructure.testrail import TestRailApi

MARKER = "testrail"
PLUGIN_NAME = "testrail_reporter_plugin"

ON_MISSING_ERROR = "error"
ON_MISSING_SKIP = "skip"


def pytest_addoption(parser):
    """Add TestRail options to pytest."""
    group = parser.getgroup("testrail")
    group.addoption("--testrail-version", action="store", help="Test run version label; empty disables reporting")
    group.addoption("--testrail-url", action="store", help="TestRail base URL")
    group.addoption("--testrail-username", action="store", help="TestRail user name")
    group.addoption("--testrail-password", action="store", help="TestRail password or API key")
    group.addoption("--testrail-project-id", action="store", help="TestRail project ID")
    group.addoption("--testrail-config", action="store", help="Path to TestRail YAML config")
    group.addoption(
        "--testrail-on-missing-case",
        action="store",
        choices=(ON_MISSING_ERROR, ON_MISSING_SKIP),
        default=ON_MISSING_ERROR,
        help="What to do with tests lacking a TestRail case id (default: error)",
    )


def load_config(config) -> TestRailConfig:
    """Build the reporter configuration from YAML/environment and command line."""
    path = config.getoption("--testrail-config")
    base = TestRailConfig.from_yaml(path) if path else TestRailConfig.from_env()
    return base.merged(
        version=config.getoption("--testrail-version"),
        url=config.getoption("--testrail-url"),
        username=config.getoption("--testrail-username"),
        password=config.getoption("--testrail-password"),
        project_id=config.getoption("--testrail-project-id"),
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        f"{MARKER}(suite_id, case_id): link the test to a TestRail suite and case",
    )

    settings = load_config(config)
    if not settings.enabled:
        get_logger().debug("reporter_disabled", reason="version is not specified")
        return

    try:
        settings.validate()
    except ConfigurationError as e:
        raise pytest.UsageError(str(e)) from e

    api = TestRailApi.create(
        base_url=settings.url,
        username=settings.username,
        password=settings.password,
        project_id=settings.project_id,
        timeout=settings.timeout,
    )
    plugin = TestRailPlugin(
        ResultReporter(api, settings),
        on_missing=config.getoption("--testrail-on-missing-case"),
    )
    config.pluginmanager.register(plugin, PLUGIN_NAME)


def item_metadata(item) -> Dict[str, Any]:
    """Collect testSuiteId/testCaseId parameters from the testrail marker."""
    marker = item.get_closest_marker(MARKER)
    if marker is None:
        return {}

    kwargs = dict(marker.kwargs)
    suite_id = kwargs.get("suite_id", kwargs.get(SUITE_ID_PARAM))
    case_id = kwargs.get("case_id", kwargs.get(CASE_ID_PARAM))
    if len(marker.args) >= 2:
        suite_id, case_id = marker.args[0], marker.args[1]

    metadata = {}
    if suite_id is not None:
        metadata[SUITE_ID_PARAM] = [suite_id]
    if case_id is not None:
        metadata[CASE_ID_PARAM] = [case_id]
    return metadata


def failure_info(report) -> FailureInfo:
    """Extract message, location and traceback text from a failed report."""
    crash = getattr(report.longrepr, "reprcrash", None)
    if crash is not None:
        return FailureInfo(
            message=crash.message,
            file=str(crash.path),
            line=crash.lineno,
            trace=report.longreprtext,
        )
    path, line, _ = report.location
    return FailureInfo(
        message=str(report.longrepr),
        file=path,
        line=(line or 0) + 1,
        trace=report.longreprtext,
    )


class TestRailPlugin:
    """Bridges pytest hooks to the reporter's lifecycle methods."""
    __test__ = False

    def __init__(self, reporter: ResultReporter, on_missing: str = ON_MISSING_ERROR):
        self._reporter = reporter
        self._on_missing = on_missing
        self._states: Dict[str, ReportState] = {}
        self._log = get_logger()

    def state_for(self, nodeid: str) -> Optional[ReportState]:
        return self._states.get(nodeid)

    @pytest.hookimpl(tryfirst=True)
    def pytest_runtest_setup(self, item):
        event = TestEvent(name=item.nodeid, metadata=item_metadata(item))
        result = self._reporter.on_test_start(event)
        if result is None:
            return
        if result.ok:
            self._states[item.nodeid] = result.state
        elif self._on_missing == ON_MISSING_SKIP:
            self._log.warning("result_not_reported", test=item.nodeid, reason=str(result.error))
        else:
            result.unwrap()

    def pytest_runtest_logreport(self, report):
        """Report the call phase, and setup errors (a fixture raised) as failures."""
        if report.when == "teardown":
            self._states.pop(report.nodeid, None)
        setup_error = report.when == "setup" and report.failed
        if report.when != "call" and not setup_error:
            return
        state = self._states.pop(report.nodeid, None)
        if state is None:
            return

        if report.passed:
            event = TestEvent(name=report.nodeid, elapsed=report.duration)
            self._reporter.on_test_passed(event, state)
        elif report.failed:
            event = TestEvent(
                name=report.nodeid,
                elapsed=report.duration,
                failure=failure_info(report),
            )
            self._reporter.on_test_failed(event, state)
