"""
Interfaces for dependency inversion.

The reporter depends on these abstractions, not on concrete implementations.
"""
from .repository import ITestRailApi
from .lifecycle import ITestLifecycleListener

__all__ = [
    'ITestRailApi',
    'ITestLifecycleListener',
]
