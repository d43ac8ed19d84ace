"""
Configuration management.
"""
from .environment import TestRailConfig, DEFAULT_TIMEOUT

__all__ = ['TestRailConfig', 'DEFAULT_TIMEOUT']
