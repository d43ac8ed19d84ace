"""
TestRail reporter - pushes test execution results to TestRail.
"""
from .core.config import TestRailConfig
from .core.domain import (
    TestCase, Run, Suite, Plan, Milestone, Section,
    FailureInfo, TestEvent, ReportState, LinkageResult,
)
from .core.exceptions import (
    TestRailReporterError,
    TransportError,
    UnsupportedMethodError,
    MissingLinkageError,
    ConfigurationError,
)
from .core.services import ResultReporter, TestRailProvisioner, format_elapsed
from .infrastructure.testrail import TestRailApi, TestRailHttpClient

__version__ = "0.1.0"

__all__ = [
    'TestRailConfig',
    'TestCase',
    'Run',
    'Suite',
    'Plan',
    'Milestone',
    'Section',
    'FailureInfo',
    'TestEvent',
    'ReportState',
    'LinkageResult',
    'TestRailReporterError',
    'TransportError',
    'UnsupportedMethodError',
    'MissingLinkageError',
    'ConfigurationError',
    'ResultReporter',
    'TestRailProvisioner',
    'format_elapsed',
    'TestRailApi',
    'TestRailHttpClient',
]
