"""
Domain entities and value objects.
"""
from .entities import Entity, TestCase, Run, Suite, Plan, Milestone, Section
from .events import FailureInfo, TestEvent, ReportState, LinkageResult

__all__ = [
    'Entity',
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
]
