"""
TestRail infrastructure module.

Provides the HTTP client and the entity-mapping API for TestRail integration.
"""
from .http_client import TestRailHttpClient
from .api_client import TestRailApi

__all__ = ['TestRailHttpClient', 'TestRailApi']
