"""
Result reporter - pushes test outcomes to TestRail.

Reacts to before-test, test-passed and test-failed signals. Suite, case and
run are passed in and returned explicitly; the reporter keeps no per-test
state between calls.
"""
import math
from typing import Any, Dict, Optional

from ..config.environment import TestRailConfig
from ..domain.entities import Run, Suite
from ..domain.events import FailureInfo, LinkageResult, ReportState, TestEvent
from ..exceptions import MissingLinkageError
from ..interfaces.lifecycle import ITestLifecycleListener
from ..interfaces.repository import ITestRailApi
from .metrics import get_logger

STATUS_PASSED = 1
STATUS_FAILED = 5

SUITE_ID_PARAM = 'testSuiteId'
CASE_ID_PARAM = 'testCaseId'

MAX_TRACE_LENGTH = 512


def elapsed_seconds(elapsed: float) -> int:
    """Round a duration up to whole seconds, never below one."""
    return max(1, int(math.ceil(elapsed or 0)))


def format_elapsed(seconds: int) -> str:
    """Render seconds in TestRail's timespan format, e.g. 3661 -> '1h 1m 1s'."""
    hours = seconds // 3600
    minutes = (seconds // 60) % 60
    seconds %= 60
    return f"{hours}h {minutes}m {seconds}s"


def build_failure_comment(failure: FailureInfo) -> str:
    """Failure message, location and the first 512 characters of the trace."""
    comment = failure.message
    comment += f"\n{failure.file}: {failure.line}"
    comment += "\n" + failure.trace[:MAX_TRACE_LENGTH]
    return comment


def _metadata_id(metadata: Dict[str, Any], key: str) -> Optional[int]:
    """Read the first value of a metadata parameter as an int."""
    value = metadata.get(key)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class ResultReporter(ITestLifecycleListener):
    """Records pass/fail results into the open TestRail run of each suite."""

    def __init__(self, api: Optional[ITestRailApi], config: TestRailConfig):
        """Initialize the reporter.

        Args:
            api: TestRail API; may be None when the config is disabled
            config: Reporter configuration; an empty version disables reporting
        """
        self._api = api
        self._config = config
        self._log = get_logger()
        if not config.enabled:
            self._log.debug("reporter_disabled", reason="version is not specified")

    @property
    def enabled(self) -> bool:
        return self._config.enabled and self._api is not None

    # Lifecycle

    def on_test_start(self, event: TestEvent) -> Optional[LinkageResult]:
        if not self.enabled:
            return None
        return self.lookup(event)

    def on_test_passed(self, event: TestEvent, state: ReportState) -> Optional[ReportState]:
        if not self.enabled:
            return None
        return self._report(state, passed=True, elapsed=event.elapsed, comment='')

    def on_test_failed(self, event: TestEvent, state: ReportState) -> Optional[ReportState]:
        if not self.enabled:
            return None
        comment = build_failure_comment(event.failure) if event.failure else ''
        return self._report(state, passed=False, elapsed=event.elapsed, comment=comment)

    # Policy

    def lookup(self, event: TestEvent) -> LinkageResult:
        """Resolve the suite and case a test is linked to via its metadata."""
        suite_id = _metadata_id(event.metadata, SUITE_ID_PARAM)
        if suite_id is None:
            return self._missing(event, None, None)
        suite = self._api.get_suite(suite_id)

        case_id = _metadata_id(event.metadata, CASE_ID_PARAM)
        if case_id is None:
            return self._missing(event, suite.name, None)
        case = self._api.get_case(case_id)
        if not case.title:
            return self._missing(event, suite.name, case_id)

        return LinkageResult(state=ReportState(suite=suite, case=case))

    def _missing(self, event: TestEvent, suite_name: Optional[str], case_id: Optional[int]) -> LinkageResult:
        self._log.warning("linkage_missing", test=event.name, suite=suite_name, case_id=case_id)
        return LinkageResult(error=MissingLinkageError(suite_name, case_id))

    def ensure_test_run_exists(self, suite: Suite) -> Optional[Run]:
        """Return the open run for a suite, creating one when none exists.

        A run found for the suite but flagged completed is neither reused
        nor duplicated; None is returned and no result is recorded.
        get_runs already asks for is_completed=0, so the completed branch
        only guards against servers that ignore that filter.
        """
        runs = self._api.get_runs()
        run = runs.get(suite.id)

        if run is None:
            run = self._api.add_run(suite.id, suite.name, '')
            self._log.log_run("created", run.id, suite.id, run.name)
            return run

        if run.is_completed:
            self._log.info("run_already_completed", run_id=run.id, suite_id=suite.id)
            return None

        self._log.log_run("reused", run.id, suite.id, run.name)
        return run

    def set_test_result(
        self,
        run_id: int,
        case_id: int,
        passed: bool,
        elapsed: float,
        error_message: str
    ) -> None:
        """Submit a passed (1) or failed (5) result for a case."""
        status_id = STATUS_PASSED if passed else STATUS_FAILED
        elapsed_text = format_elapsed(elapsed_seconds(elapsed))

        self._api.add_result_for_case(
            run_id,
            case_id,
            status_id,
            error_message,
            self._config.version,
            elapsed_text
        )
        self._log.log_result(run_id, case_id, status_id, elapsed_text)

    def maybe_close_run(self, run: Run, suite: Suite) -> Optional[Run]:
        """Close the run once its counters account for every case of the suite.

        Returns:
            The closed run, or None when it stays open
        """
        current = self._api.get_run(run.id)
        total = len(self._api.get_cases(suite.id))

        passed = current.passed_count
        failed = current.failed_count
        if passed == total or failed == total or passed + failed == total:
            closed = self._api.close_run(current.id)
            self._log.log_run("closed", closed.id, suite.id, closed.name)
            return closed
        return None

    def _report(self, state: ReportState, passed: bool, elapsed: float, comment: str) -> ReportState:
        run = self.ensure_test_run_exists(state.suite)
        if run is None:
            return state.with_run(None)

        self.set_test_result(run.id, state.case.id, passed, elapsed, comment)
        closed = self.maybe_close_run(run, state.suite)
        return state.with_run(closed or run)
