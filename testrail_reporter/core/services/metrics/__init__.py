"""
Structured logging of reporting events.
"""
from .logger import StructuredLogger, StructuredFormatter, get_logger

__all__ = [
    'StructuredLogger',
    'StructuredFormatter',
    'get_logger',
]
