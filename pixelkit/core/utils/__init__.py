"""
Utility modules for core functionality.

Modules:
- decorators: timer context manager and log_duration decorator
- enum_converter: case-insensitive enum parsing
"""

from .decorators import log_duration, timer
from .enum_converter import parse_enum

__all__ = [
    "log_duration",
    "timer",
    "parse_enum",
]
