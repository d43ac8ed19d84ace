"""
Infrastructure layer - concrete implementations of interfaces.
"""
from .testrail import TestRailHttpClient, TestRailApi

__all__ = ['TestRailHttpClient', 'TestRailApi']
