"""
Test utilities package.

Provides helper generators for testing the cncvm dispatch layer.
"""

from .generators import FailingGenerator, RecordingGenerator
from .machines import MAX_DEVIATION, MIN_LINE_LENGTH, make_machine

__all__ = [
    "RecordingGenerator",
    "FailingGenerator",
    "make_machine",
    "MAX_DEVIATION",
    "MIN_LINE_LENGTH",
]
