"""Utilities module for the Berlin Clock service.

This module contains shared utility components for logging, errors and
clock sources.
"""

from berlin_clock.utils import clock, exceptions, logging_utils

__all__ = [
    "clock",
    "exceptions",
    "logging_utils",
]
