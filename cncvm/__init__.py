"""
cncvm Python Package

A G-code virtual machine that resolves motion statements into an absolute
position history, linearizing arcs, and replays that history into output
generators that only hear about what changed.

Key components:
- Machine: position engine, arc interpolator and modal interpreter
- MachineConfig: units, distance modes, work plane and arc tolerances
- GcodeParser: turns G-code text into statements
- CodeGenerator / BaseGenerator: output backend contract
- handle_position, handle_all_positions, handle_position_at_index: replay
"""

from ._version import __version__
from .export import (
    BaseGenerator,
    CodeGenerator,
    DispatchStatus,
    GcodeGenerator,
    handle_all_positions,
    handle_position,
    handle_position_at_index,
)
from .gcode import GcodeParser, Statement, Word
from .vm import Machine, MachineConfig, Position, State

__all__ = [
    "__version__",
    "Machine",
    "MachineConfig",
    "Position",
    "State",
    "GcodeParser",
    "Statement",
    "Word",
    "CodeGenerator",
    "BaseGenerator",
    "GcodeGenerator",
    "DispatchStatus",
    "handle_position",
    "handle_all_positions",
    "handle_position_at_index",
]
