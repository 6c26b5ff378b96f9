"""
Tests for the modal interpreter: statements in, positions out.
"""

import logging

import pytest

from cncvm.gcode import GcodeParser, Statement
from cncvm.utils.errors import NonCircularArcError, StatementError, UnsupportedWordError
from cncvm.vm import (
    CutterCompensation,
    DistanceMode,
    FeedMode,
    Machine,
    MoveMode,
    Plane,
    Units,
)


def run_program(text: str, machine: Machine | None = None) -> Machine:
    machine = machine or Machine()
    parser = GcodeParser()
    statements = parser.parse_program(text)
    assert parser.get_errors() == []
    machine.run(statements)
    return machine


@pytest.mark.gcode
class TestModalWords:
    def test_units_and_distance_modes(self):
        machine = run_program("G20 G91 G90.1 G18")
        assert machine.config.units is Units.IMPERIAL
        assert machine.config.distance_mode is DistanceMode.INCREMENTAL
        assert machine.config.arc_distance_mode is DistanceMode.ABSOLUTE
        assert machine.config.plane is Plane.XZ

        run_program("G21 G90 G91.1 G17", machine)
        assert machine.config.units is Units.METRIC
        assert machine.config.distance_mode is DistanceMode.ABSOLUTE
        assert machine.config.arc_distance_mode is DistanceMode.INCREMENTAL
        assert machine.config.plane is Plane.XY

    def test_config_only_statement_appends_nothing(self):
        machine = run_program("G21 G90")
        assert len(machine.positions) == 1

    def test_feedrate_is_scaled_to_mm(self):
        machine = run_program("G20 F10")
        assert machine.state.feedrate == pytest.approx(254.0)

    def test_inverse_time_feedrate_is_not_scaled(self):
        machine = run_program("G20 G93 F2")
        assert machine.state.feedrate == 2.0

        run_program("G94 F2", machine)
        assert machine.state.feedrate == pytest.approx(50.8)

    def test_feed_mode_and_cutter_compensation(self):
        machine = run_program("G94 G41")
        assert machine.state.feed_mode is FeedMode.UNITS_PER_MINUTE
        assert machine.state.cutter_compensation is CutterCompensation.LEFT
        run_program("G93\nG40", machine)
        assert machine.state.feed_mode is FeedMode.INVERSE_TIME
        assert machine.state.cutter_compensation is CutterCompensation.OFF

    def test_spindle_words(self):
        machine = run_program("M3 S1200")
        assert machine.state.spindle_enabled
        assert machine.state.spindle_clockwise
        assert machine.state.spindle_speed == 1200.0

        run_program("M4", machine)
        assert machine.state.spindle_enabled
        assert not machine.state.spindle_clockwise

        run_program("M5", machine)
        assert not machine.state.spindle_enabled

    def test_coolant_words(self):
        machine = run_program("M7\nM8")
        assert machine.state.mist_coolant and machine.state.flood_coolant
        run_program("M9", machine)
        assert not machine.state.mist_coolant
        assert not machine.state.flood_coolant

    def test_tool_is_selected_then_changed(self):
        machine = run_program("T3")
        assert machine.state.tool is None
        run_program("M6", machine)
        assert machine.state.tool == 3

    def test_toolchange_without_selection_is_ignored(self, caplog):
        with caplog.at_level(logging.WARNING):
            machine = run_program("M6")
        assert machine.state.tool is None
        assert "without a selected tool" in caplog.text

    def test_program_end_is_accepted(self):
        machine = run_program("M2\nM30")
        assert len(machine.positions) == 1


@pytest.mark.gcode
class TestMotion:
    def test_motion_mode_is_modal(self):
        machine = run_program("G1 X1 F100\nY2\nZ3")
        coords = [(p.x, p.y, p.z) for p in machine.positions]
        assert coords == [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 2.0, 0.0), (1.0, 2.0, 3.0)]
        assert all(p.state.move_mode is MoveMode.LINEAR for p in machine.positions[1:])
        assert all(p.state.feedrate == 100.0 for p in machine.positions[1:])

    def test_rapid_then_linear(self):
        machine = run_program("G0 Z5\nG1 Z0")
        assert machine.positions[1].state.move_mode is MoveMode.RAPID
        assert machine.positions[2].state.move_mode is MoveMode.LINEAR

    def test_imperial_incremental_moves(self):
        machine = run_program("G20 G91\nG1 X1\nX1")
        assert machine.current_position.x == pytest.approx(50.8)

    def test_state_only_statement_appends_in_place(self):
        machine = run_program("G1 X1 Y1\nM3 S500")
        assert len(machine.positions) == 3
        last = machine.current_position
        assert (last.x, last.y, last.z) == (1.0, 1.0, 0.0)
        assert last.state.spindle_enabled
        assert not machine.positions[1].state.spindle_enabled

    def test_arc_through_run(self):
        machine = run_program("G17 G90\nG0 X0 Y0\nG2 X10 Y0 I5 J0")
        last = machine.current_position
        assert (last.x, last.y) == (10.0, 0.0)
        # the arc becomes many linear moves
        assert len(machine.positions) > 10
        assert last.state.move_mode is MoveMode.LINEAR
        assert machine.motion_mode is MoveMode.CW_ARC

    def test_center_words_alone_continue_an_arc(self):
        machine = run_program("G90.1\nG3 X10 I5")
        count = len(machine.positions)
        run_program("I5", machine)
        # start equals end with no extra turns: a single move in place
        assert len(machine.positions) == count + 1
        assert machine.current_position.x == 10.0

    def test_axes_without_motion_mode_fail(self):
        machine = Machine()
        with pytest.raises(UnsupportedWordError):
            machine.process(Statement.of(X=1))
        assert len(machine.positions) == 1

    def test_radius_arcs_are_rejected(self):
        machine = Machine()
        with pytest.raises(UnsupportedWordError):
            machine.process(Statement.of(G=2, X=10, R=5))

    def test_failed_arc_restores_state(self):
        machine = run_program("G1 X0 F100")
        before = machine.state
        count = len(machine.positions)
        with pytest.raises(NonCircularArcError):
            machine.process(Statement.of(G=2, X=20, I=5))
        assert machine.state == before
        assert len(machine.positions) == count

    def test_failed_arc_discards_words_of_its_block(self):
        machine = run_program("G1 X0 F100")
        before = machine.state
        count = len(machine.positions)
        with pytest.raises(NonCircularArcError):
            machine.process(Statement.of(G=2, X=20, I=5, F=500, S=900, M=3))
        assert machine.state == before
        assert len(machine.positions) == count

    def test_rejected_radius_arc_keeps_previous_state(self):
        machine = Machine()
        with pytest.raises(UnsupportedWordError):
            machine.process(Statement.of(G=2, X=10, R=5, F=300))
        assert machine.state.feedrate == 0.0
        assert machine.state.move_mode is MoveMode.UNSET


@pytest.mark.gcode
class TestRunErrors:
    def test_unknown_g_word_reports_statement_index(self):
        parser = GcodeParser()
        statements = parser.parse_program("G21\nG1 X1\nG38.2 Z-5")
        machine = Machine()
        with pytest.raises(StatementError) as exc:
            machine.run(statements)
        assert exc.value.index == 2
        assert isinstance(exc.value.cause, UnsupportedWordError)
        # earlier statements took effect
        assert machine.current_position.x == 1.0

    def test_unknown_m_word(self):
        with pytest.raises(StatementError) as exc:
            Machine().run([Statement.of(M=98)])
        assert exc.value.index == 0
        assert "M98" in str(exc.value)
