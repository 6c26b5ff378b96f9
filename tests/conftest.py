"""
Pytest configuration and shared fixtures for cncvm tests.

Provides machine fixtures for each work plane and distance mode combination
used across the suite, plus recording generators for dispatch tests.
"""

import logging
import os
import sys

import pytest

# Add the parent directory to Python path so we can import the package and test utils
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from cncvm.vm import DistanceMode, Machine, MoveMode
from tests.utils import RecordingGenerator, make_machine

logger = logging.getLogger(__name__)


# ============================================================================
# MACHINE FIXTURES
# ============================================================================

@pytest.fixture
def machine() -> Machine:
    """Metric, absolute, XY plane machine with incremental arc centers."""
    return make_machine()


@pytest.fixture
def cw_machine() -> Machine:
    """Metric XY machine with absolute arc centers, ready for a clockwise arc."""
    return make_machine(arc_distance_mode=DistanceMode.ABSOLUTE, move_mode=MoveMode.CW_ARC)


@pytest.fixture
def ccw_machine() -> Machine:
    """Metric XY machine with absolute arc centers, ready for a counterclockwise arc."""
    return make_machine(arc_distance_mode=DistanceMode.ABSOLUTE, move_mode=MoveMode.CCW_ARC)


# ============================================================================
# GENERATOR FIXTURES
# ============================================================================

@pytest.fixture
def recorder() -> RecordingGenerator:
    gen = RecordingGenerator()
    gen.init()
    return gen


# ============================================================================
# PYTEST CONFIGURATION HOOKS
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that exercise complete workflows"
    )
    config.addinivalue_line(
        "markers", "gcode: Tests specifically for G-code parsing and interpretation functionality"
    )
