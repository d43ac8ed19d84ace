"""
Test lifecycle listener interface.

Host runners call these methods directly; implementations stay
framework-agnostic.
"""
from abc import ABC, abstractmethod
from typing import Optional

from ..domain.events import LinkageResult, ReportState, TestEvent


class ITestLifecycleListener(ABC):
    """Receives before-test, test-passed and test-failed signals."""

    @abstractmethod
    def on_test_start(self, event: TestEvent) -> Optional[LinkageResult]:
        """Resolve the TestRail linkage of a test about to run.

        Returns:
            LinkageResult, or None when the listener is disabled
        """
        pass

    @abstractmethod
    def on_test_passed(self, event: TestEvent, state: ReportState) -> Optional[ReportState]:
        """Record a passing result. Returns the updated state."""
        pass

    @abstractmethod
    def on_test_failed(self, event: TestEvent, state: ReportState) -> Optional[ReportState]:
        """Record a failing result. Returns the updated state."""
        pass
