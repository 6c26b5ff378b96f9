"""
Replaying machine positions into output generators.

Main components:
- generator.py: CodeGenerator contract and the no-op BaseGenerator
- dispatch.py: change detection and replay (handle_position and friends)
- gcode.py: G-code text generator
"""

from .dispatch import DispatchStatus, handle_all_positions, handle_position, handle_position_at_index
from .gcode import GcodeGenerator, format_float
from .generator import BaseGenerator, CodeGenerator

__all__ = [
    "CodeGenerator",
    "BaseGenerator",
    "GcodeGenerator",
    "DispatchStatus",
    "format_float",
    "handle_position",
    "handle_all_positions",
    "handle_position_at_index",
]
