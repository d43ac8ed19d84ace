"""
Lifecycle events and reporting state passed between the host runner and the reporter.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from ..exceptions import MissingLinkageError
from .entities import Run, Suite, TestCase


@dataclass(frozen=True)
class FailureInfo:
    """Details of a failed or errored test."""
    message: str
    file: str = ""
    line: int = 0
    trace: str = ""


@dataclass(frozen=True)
class TestEvent:
    """A single test lifecycle signal.

    Attributes:
        name: Test name as known to the host runner
        metadata: Test parameters, e.g. {'testSuiteId': [3], 'testCaseId': [42]}
        elapsed: Duration in seconds (pass/fail events only)
        failure: Failure details (fail events only)
    """
    __test__ = False

    name: str
    metadata: Dict[str, Any] = field(default_factory=dict, hash=False)
    elapsed: float = 0.0
    failure: Optional[FailureInfo] = None


@dataclass(frozen=True)
class ReportState:
    """Suite, case and run resolved for one test."""
    suite: Suite
    case: TestCase
    run: Optional[Run] = None

    def with_run(self, run: Optional[Run]) -> 'ReportState':
        return replace(self, run=run)


@dataclass(frozen=True)
class LinkageResult:
    """Outcome of resolving a test's TestRail linkage.

    Either ``state`` or ``error`` is set. The caller decides whether a
    missing linkage is fatal (``unwrap``) or skippable (check ``ok``).
    """
    state: Optional[ReportState] = None
    error: Optional[MissingLinkageError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.state is not None

    def unwrap(self) -> ReportState:
        if self.error is not None:
            raise self.error
        if self.state is None:
            raise MissingLinkageError()
        return self.state
