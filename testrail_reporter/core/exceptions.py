"""
Exception hierarchy for the TestRail reporter.

Nothing here is retried: every error surfaces immediately to the caller.
"""
from typing import Optional


class TestRailReporterError(Exception):
    """Base class for all reporter errors."""


class TransportError(TestRailReporterError):
    """The HTTP call to TestRail failed (connection, timeout, non-2xx, bad body)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class UnsupportedMethodError(TestRailReporterError):
    """Only GET and POST are valid against the TestRail API."""

    def __init__(self, method: str):
        super().__init__(f"{method} method isn't supported")
        self.method = method


class MissingLinkageError(TestRailReporterError):
    """A test has no resolvable TestRail case id."""

    def __init__(self, suite_name: Optional[str] = None, case_id: Optional[int] = None):
        target = suite_name or "the"
        super().__init__(
            f"Please add a test case to the {target} suite in testRail"
        )
        self.suite_name = suite_name
        self.case_id = case_id


class ConfigurationError(TestRailReporterError):
    """Reporter is enabled but required settings are missing."""
