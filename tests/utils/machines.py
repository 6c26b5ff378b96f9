"""
Machine factories shared by the test suite.
"""

from cncvm.vm import DistanceMode, Machine, MachineConfig, MoveMode, Plane, Units

MAX_DEVIATION = 0.002
MIN_LINE_LENGTH = 0.01


def make_machine(
    plane: Plane = Plane.XY,
    units: Units = Units.METRIC,
    distance_mode: DistanceMode = DistanceMode.ABSOLUTE,
    arc_distance_mode: DistanceMode = DistanceMode.INCREMENTAL,
    max_arc_deviation: float = MAX_DEVIATION,
    min_arc_line_length: float = MIN_LINE_LENGTH,
    move_mode: MoveMode | None = None,
) -> Machine:
    """Machine at the origin with explicit configuration."""
    machine = Machine(
        MachineConfig(
            units=units,
            distance_mode=distance_mode,
            arc_distance_mode=arc_distance_mode,
            plane=plane,
            max_arc_deviation=max_arc_deviation,
            min_arc_line_length=min_arc_line_length,
        )
    )
    if move_mode is not None:
        machine.state = machine.state.evolve(move_mode=move_mode)
    return machine
