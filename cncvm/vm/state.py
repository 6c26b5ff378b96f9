"""
Machine state for the cncvm position engine

Holds:
- MachineConfig: units, distance modes, work plane and arc tolerances
- State: the discrete (modal) state snapshot carried by each position
- Position: an absolute X/Y/Z point plus its State
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from cncvm import config


class Units(Enum):
    METRIC = "G21"
    IMPERIAL = "G20"


class DistanceMode(Enum):
    ABSOLUTE = "absolute"
    INCREMENTAL = "incremental"


class Plane(Enum):
    XY = "G17"
    XZ = "G18"
    YZ = "G19"


class MoveMode(Enum):
    UNSET = "unset"
    RAPID = "G0"
    LINEAR = "G1"
    CW_ARC = "G2"
    CCW_ARC = "G3"


class FeedMode(Enum):
    UNSET = "unset"
    INVERSE_TIME = "G93"
    UNITS_PER_MINUTE = "G94"
    UNITS_PER_REVOLUTION = "G95"


class CutterCompensation(Enum):
    UNSET = "unset"
    OFF = "G40"
    LEFT = "G41"
    RIGHT = "G42"


@dataclass
class MachineConfig:
    """Per-machine configuration; rarely toggled while a program runs"""

    units: Units = Units.METRIC
    distance_mode: DistanceMode = DistanceMode.ABSOLUTE
    arc_distance_mode: DistanceMode = DistanceMode.INCREMENTAL
    plane: Plane = Plane.XY
    max_arc_deviation: float = field(default_factory=lambda: config.MAX_ARC_DEVIATION)
    min_arc_line_length: float = field(default_factory=lambda: config.MIN_ARC_LINE_LENGTH)

    def __post_init__(self):
        if self.max_arc_deviation <= 0:
            raise ValueError(f"max_arc_deviation must be positive, got {self.max_arc_deviation}")
        if self.min_arc_line_length <= 0:
            raise ValueError(f"min_arc_line_length must be positive, got {self.min_arc_line_length}")

    @property
    def metric(self) -> bool:
        return self.units is Units.METRIC

    @property
    def units_scale(self) -> float:
        """Multiplier converting program units to mm"""
        return 1.0 if self.metric else config.MM_PER_INCH


@dataclass(frozen=True)
class State:
    """Discrete machine state. ``None``/``UNSET`` mean never explicitly set."""

    tool: int | None = None
    spindle_enabled: bool = False
    spindle_clockwise: bool = False
    spindle_speed: float = 0.0
    flood_coolant: bool = False
    mist_coolant: bool = False
    feed_mode: FeedMode = FeedMode.UNSET
    feedrate: float = 0.0
    cutter_compensation: CutterCompensation = CutterCompensation.UNSET
    move_mode: MoveMode = MoveMode.UNSET

    def evolve(self, **changes) -> "State":
        """Copy of this state with some fields replaced"""
        return replace(self, **changes)


@dataclass(frozen=True)
class Position:
    """Absolute machine position (mm) with a snapshot of the state at that point"""

    state: State = field(default_factory=State)
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_list(self) -> list[float]:
        """Convert to list [x, y, z]"""
        return [self.x, self.y, self.z]
