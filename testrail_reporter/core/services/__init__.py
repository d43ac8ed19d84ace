"""
Core services - reporting policy and provisioning.
"""
from .result_reporter import (
    ResultReporter,
    STATUS_PASSED,
    STATUS_FAILED,
    build_failure_comment,
    elapsed_seconds,
    format_elapsed,
)
from .provisioning import TestRailProvisioner

__all__ = [
    'ResultReporter',
    'STATUS_PASSED',
    'STATUS_FAILED',
    'build_failure_comment',
    'elapsed_seconds',
    'format_elapsed',
    'TestRailProvisioner',
]
