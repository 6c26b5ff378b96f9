"""
G-code text generator.

Serializes dispatched changes back into plain G-code. Arcs reach this
generator already linearized, so only G0/G1 moves are written.
"""

import logging

from cncvm.config import GCODE_PRECISION
from cncvm.vm.state import CutterCompensation, FeedMode, MoveMode

from .generator import BaseGenerator

logger = logging.getLogger(__name__)


def format_float(value: float, precision: int = GCODE_PRECISION) -> str:
    """Fixed-point text without trailing zeros or a trailing dot."""
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


class GcodeGenerator(BaseGenerator):
    """Collects G-code lines for every change it is notified about"""

    PREAMBLE = ("G21", "G90")

    def __init__(self, precision: int = GCODE_PRECISION):
        super().__init__()
        self.precision = precision
        self.lines: list[str] = []
        self._motion: MoveMode | None = None

    def _fmt(self, value: float) -> str:
        return format_float(value, self.precision)

    def init(self) -> None:
        super().init()
        self.lines = list(self.PREAMBLE)
        self._motion = None

    def toolchange(self, tool: int | None) -> None:
        if tool is None:
            return
        self.lines.append(f"T{tool} M6")

    def spindle(self, enabled: bool, clockwise: bool, speed: float) -> None:
        if not enabled:
            # A speed change while stopped writes nothing
            if self.get_position().state.spindle_enabled:
                self.lines.append("M5")
            return
        code = "M3" if clockwise else "M4"
        self.lines.append(f"{code} S{self._fmt(speed)}")

    def coolant(self, flood: bool, mist: bool) -> None:
        cur = self.get_position().state
        cur_flood, cur_mist = cur.flood_coolant, cur.mist_coolant
        if (cur_flood and not flood) or (cur_mist and not mist):
            self.lines.append("M9")
            cur_flood = cur_mist = False
        if mist and not cur_mist:
            self.lines.append("M7")
        if flood and not cur_flood:
            self.lines.append("M8")

    def feed_mode(self, mode: FeedMode) -> None:
        if mode is FeedMode.UNSET:
            return
        self.lines.append(mode.value)

    def feedrate(self, rate: float) -> None:
        self.lines.append(f"F{self._fmt(rate)}")

    def cutter_compensation(self, mode: CutterCompensation) -> None:
        if mode is CutterCompensation.UNSET:
            return
        self.lines.append(mode.value)

    def move(self, x: float, y: float, z: float, move_mode: MoveMode) -> None:
        if move_mode not in (MoveMode.RAPID, MoveMode.LINEAR):
            raise ValueError(f"cannot write a {move_mode.name} move, arcs must be linearized")

        cur = self.get_position()
        words = []
        if move_mode is not self._motion:
            words.append(move_mode.value)
            self._motion = move_mode
        for letter, old, new in (("X", cur.x, x), ("Y", cur.y, y), ("Z", cur.z, z)):
            if old != new:
                words.append(f"{letter}{self._fmt(new)}")
        self.lines.append(" ".join(words))

    def finish(self) -> None:
        self.lines.append("M2")

    def text(self) -> str:
        return "\n".join(self.lines) + "\n"
