"""
Position engine for cncvm

Resolves statements into absolute machine positions and keeps the ordered
position history that generators replay. Linear moves append one position;
arcs are approximated by a run of short linear moves.
"""

import dataclasses
import logging
import math
from collections.abc import Iterable

from cncvm import config
from cncvm.gcode.statement import Statement
from cncvm.utils.errors import (
    CncVmError,
    DegenerateArcError,
    InvalidArcError,
    MissingWordError,
    NonCircularArcError,
    StatementError,
    UnsupportedWordError,
)

from .arcs import arc_step_count, interpolate_arc, project, sweep_angle, unproject
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

logger = logging.getLogger(__name__)

_MOTION_CODES = {
    0.0: MoveMode.RAPID,
    1.0: MoveMode.LINEAR,
    2.0: MoveMode.CW_ARC,
    3.0: MoveMode.CCW_ARC,
}
_PLANE_CODES = {17.0: Plane.XY, 18.0: Plane.XZ, 19.0: Plane.YZ}
_UNIT_CODES = {20.0: Units.IMPERIAL, 21.0: Units.METRIC}
_DISTANCE_CODES = {90.0: DistanceMode.ABSOLUTE, 91.0: DistanceMode.INCREMENTAL}
_ARC_DISTANCE_CODES = {90.1: DistanceMode.ABSOLUTE, 91.1: DistanceMode.INCREMENTAL}
_FEED_MODE_CODES = {
    93.0: FeedMode.INVERSE_TIME,
    94.0: FeedMode.UNITS_PER_MINUTE,
    95.0: FeedMode.UNITS_PER_REVOLUTION,
}
_CUTTER_COMP_CODES = {
    40.0: CutterCompensation.OFF,
    41.0: CutterCompensation.LEFT,
    42.0: CutterCompensation.RIGHT,
}
_PROGRAM_END_CODES = {2.0, 30.0}


class Machine:
    """
    Virtual machine turning statements into an append-only position history.

    The history always holds at least the initial position; its last element
    is the current position every new statement is resolved against.
    """

    def __init__(self, machine_config: MachineConfig | None = None, state: State | None = None):
        """
        Args:
            machine_config: Units, distance modes, plane and arc tolerances
            state: Initial discrete state (defaults to everything unset)
        """
        # Modal G words change the config, so each machine owns a copy
        self.config = dataclasses.replace(machine_config) if machine_config is not None else MachineConfig()
        self.state = state if state is not None else State()
        self._positions: list[Position] = [Position(self.state)]

        # Modal motion (G0-G3); the state's move mode is what positions carry
        self.motion_mode = MoveMode.UNSET
        self.pending_tool: int | None = None

    # ----- History -----

    @property
    def positions(self) -> tuple[Position, ...]:
        return tuple(self._positions)

    @property
    def current_position(self) -> Position:
        """Top of the position history"""
        return self._positions[-1]

    @property
    def position_count(self) -> int:
        return len(self._positions)

    def position_at(self, idx: int) -> Position:
        """Single history entry, without copying the history."""
        return self._positions[idx]

    def _add_pos(self, pos: Position) -> None:
        self._positions.append(pos)

    def _add_point(self, x: float, y: float, z: float) -> None:
        self._add_pos(Position(self.state, float(x), float(y), float(z)))

    # ----- Position engine -----

    def calc_pos(self, stmt: Statement) -> tuple[float, float, float, float, float, float]:
        """
        Absolute target and arc center of a statement.

        Axes missing from the statement keep the current value. Values are
        converted to mm, and incremental modes are resolved against the
        current (start) position.

        Returns:
            (x, y, z, i, j, k) in absolute machine coordinates
        """
        pos = self.current_position
        scale = self.config.units_scale
        incremental = self.config.distance_mode is DistanceMode.INCREMENTAL

        target = []
        for letter, current in (("X", pos.x), ("Y", pos.y), ("Z", pos.z)):
            try:
                value = stmt.get(letter) * scale
            except MissingWordError:
                target.append(current)
                continue
            target.append(current + value if incremental else value)
        new_x, new_y, new_z = target

        new_i = stmt.get_default("I", 0.0) * scale
        new_j = stmt.get_default("J", 0.0) * scale
        new_k = stmt.get_default("K", 0.0) * scale

        if self.config.arc_distance_mode is DistanceMode.INCREMENTAL:
            new_i, new_j, new_k = pos.x + new_i, pos.y + new_j, pos.z + new_k

        return new_x, new_y, new_z, new_i, new_j, new_k

    def positioning(self, stmt: Statement) -> None:
        """Append a single linear move to the statement's target."""
        new_x, new_y, new_z, _, _, _ = self.calc_pos(stmt)
        self._add_point(new_x, new_y, new_z)

    def approximate_arc(self, stmt: Statement) -> None:
        """
        Append an arc from the current position as a run of linear moves.

        The direction comes from the current move mode (CW_ARC is clockwise,
        anything else counterclockwise). An optional P word adds whole turns.
        The exact end point is always appended last.

        Raises:
            DegenerateArcError: start or end lies on the center
            NonCircularArcError: start and end radii differ by more than 1 %
            InvalidArcError: P is negative or not a whole number
        """
        start = self.current_position
        end_x, end_y, end_z, end_i, end_j, end_k = self.calc_pos(stmt)

        turns = stmt.get_default("P", 0.0)
        if turns < 0 or not float(turns).is_integer():
            raise InvalidArcError(f"P must be a non-negative whole number of turns, got {turns:g}")
        turns = int(turns)

        clockwise = self.state.move_mode is MoveMode.CW_ARC
        plane = self.config.plane

        s1, s2, s3 = project(plane, (start.x, start.y, start.z))
        e1, e2, e3 = project(plane, (end_x, end_y, end_z))
        c1, c2, _ = project(plane, (end_i, end_j, end_k))

        radius1 = math.hypot(c1 - s1, c2 - s2)
        radius2 = math.hypot(c1 - e1, c2 - e2)
        if radius1 == 0 or radius2 == 0:
            raise DegenerateArcError()

        deviation = abs((radius2 - radius1) / radius1)
        if deviation > config.ARC_RADIUS_TOLERANCE:
            raise NonCircularArcError(deviation * 100)

        theta1 = math.atan2(s2 - c2, s1 - c1)
        theta2 = math.atan2(e2 - c2, e1 - c1)
        sweep = sweep_angle(theta1, theta2, clockwise, turns)

        steps = arc_step_count(
            sweep,
            radius1,
            e3 - s3,
            self.config.max_arc_deviation,
            self.config.min_arc_line_length,
        )
        logger.debug(
            "Arc %s r=%.4f sweep=%.4f rad turns=%d steps=%d",
            "CW" if clockwise else "CCW",
            radius1,
            sweep,
            turns,
            steps,
        )

        points = ()
        if steps > 0:
            points = interpolate_arc((c1, c2), radius1, theta1, sweep, (s3, e3), steps)

        # An arc is emitted as plain linear moves
        self.state = self.state.evolve(move_mode=MoveMode.LINEAR)
        for a1, a2, a3 in points:
            self._add_point(*unproject(plane, a1, a2, a3))
        self._add_point(end_x, end_y, end_z)

    # ----- Modal interpreter -----

    def process(self, stmt: Statement) -> None:
        """
        Execute one statement.

        Modal words (units, distance modes, plane, feed mode, cutter
        compensation, feedrate, spindle, coolant, tool) are applied first,
        then the statement moves if it carries any axis word, or center words
        while an arc mode is active.
        A statement that only changes state appends a position in place so
        that generators see the change.
        A failed move leaves the state as it was before the statement; modal
        config words, the motion mode and a selected tool keep what the
        statement set.

        Raises:
            UnsupportedWordError: unknown G or M word, or axes with no motion mode
            ArcError: the arc could not be approximated
        """
        previous_state = self.state
        moved = False

        for code in stmt.values("G"):
            self._apply_g(round(code, 1))

        if stmt.has("F"):
            feedrate = stmt.get("F")
            # Inverse time feed is 1/min, not a length
            if self.state.feed_mode is not FeedMode.INVERSE_TIME:
                feedrate *= self.config.units_scale
            self.state = self.state.evolve(feedrate=feedrate)
        if stmt.has("S"):
            self.state = self.state.evolve(spindle_speed=stmt.get("S"))
        if stmt.has("T"):
            self.pending_tool = int(stmt.get("T"))

        for code in stmt.values("M"):
            self._apply_m(round(code, 1))

        has_axes = any(stmt.has(letter) for letter in "XYZ")
        has_center = any(stmt.has(letter) for letter in "IJK")
        if has_axes or (has_center and self.motion_mode in (MoveMode.CW_ARC, MoveMode.CCW_ARC)):
            try:
                self._move(stmt)
            except CncVmError:
                self.state = previous_state
                raise
            moved = True

        if not moved and self.state != previous_state:
            pos = self.current_position
            self._add_point(pos.x, pos.y, pos.z)

        logger.trace("Processed %s -> %d positions", stmt, len(self._positions))  # type: ignore[attr-defined]

    def run(self, statements: Iterable[Statement]) -> None:
        """
        Process statements in order.

        Raises:
            StatementError: wrapping the first failure with its statement index
        """
        for index, stmt in enumerate(statements):
            try:
                self.process(stmt)
            except CncVmError as e:
                raise StatementError(index, e) from e

    def _move(self, stmt: Statement) -> None:
        if self.motion_mode is MoveMode.UNSET:
            raise UnsupportedWordError(f"axis words without an active motion mode: {stmt}")

        if self.motion_mode not in (MoveMode.CW_ARC, MoveMode.CCW_ARC):
            self.state = self.state.evolve(move_mode=self.motion_mode)
            self.positioning(stmt)
            return

        if stmt.has("R"):
            raise UnsupportedWordError("radius format arcs (R) are not supported")
        self.state = self.state.evolve(move_mode=self.motion_mode)
        self.approximate_arc(stmt)

    def _apply_g(self, code: float) -> None:
        cfg = self.config
        if code in _MOTION_CODES:
            self.motion_mode = _MOTION_CODES[code]
        elif code in _PLANE_CODES:
            cfg.plane = _PLANE_CODES[code]
        elif code in _UNIT_CODES:
            cfg.units = _UNIT_CODES[code]
        elif code in _DISTANCE_CODES:
            cfg.distance_mode = _DISTANCE_CODES[code]
        elif code in _ARC_DISTANCE_CODES:
            cfg.arc_distance_mode = _ARC_DISTANCE_CODES[code]
        elif code in _FEED_MODE_CODES:
            self.state = self.state.evolve(feed_mode=_FEED_MODE_CODES[code])
        elif code in _CUTTER_COMP_CODES:
            self.state = self.state.evolve(cutter_compensation=_CUTTER_COMP_CODES[code])
        else:
            raise UnsupportedWordError(f"G{code:g}")

    def _apply_m(self, code: float) -> None:
        if code == 3:
            self.state = self.state.evolve(spindle_enabled=True, spindle_clockwise=True)
        elif code == 4:
            self.state = self.state.evolve(spindle_enabled=True, spindle_clockwise=False)
        elif code == 5:
            self.state = self.state.evolve(spindle_enabled=False)
        elif code == 6:
            if self.pending_tool is None:
                logger.warning("M6 without a selected tool ignored")
                return
            self.state = self.state.evolve(tool=self.pending_tool)
        elif code == 7:
            self.state = self.state.evolve(mist_coolant=True)
        elif code == 8:
            self.state = self.state.evolve(flood_coolant=True)
        elif code == 9:
            self.state = self.state.evolve(mist_coolant=False, flood_coolant=False)
        elif code in _PROGRAM_END_CODES:
            logger.debug("Program end M%g", code)
        else:
            raise UnsupportedWordError(f"M{code:g}")
