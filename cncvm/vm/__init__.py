"""
Position engine: machine configuration, discrete state and position history.
"""

from .machine import Machine
from .state import (
    CutterCompensation,
    DistanceMode,
    FeedMode,
    MachineConfig,
    MoveMode,
    Plane,
    Position,
    State,
    Units,
)

__all__ = [
    "Machine",
    "MachineConfig",
    "State",
    "Position",
    "Units",
    "DistanceMode",
    "Plane",
    "MoveMode",
    "FeedMode",
    "CutterCompensation",
]
