"""
Arc linearization quickstart for cncvm.
- Runs a small program with a clockwise half circle through the machine
- Replays the positions into a G-code generator and a printing generator
- Shows streaming replay of the newest position with handle_position_at_index

Run from the repository root:
    python examples/arc_quickstart.py
"""

from cncvm import BaseGenerator, GcodeGenerator, GcodeParser, Machine, handle_all_positions
from cncvm.export import handle_position_at_index
from cncvm.gcode import Statement

PROGRAM = """
G21 G90 G90.1 (metric, absolute, absolute arc centers)
G0 X0 Y0 Z1
G1 Z0 F300
G2 X10 Y0 I5 J0
"""


class PrintingGenerator(BaseGenerator):
    def feedrate(self, rate):
        print(f"feedrate -> {rate:g} mm/min")

    def move(self, x, y, z, move_mode):
        print(f"{move_mode.name:<6} X{x:.3f} Y{y:.3f} Z{z:.3f}")


def main() -> None:
    machine = Machine()
    machine.run(GcodeParser().parse_program(PROGRAM))
    print(f"positions: {len(machine.positions)}")

    gcode = GcodeGenerator()
    gcode.init()
    status = handle_all_positions(machine, gcode)
    print("replay:", status.message)
    gcode.finish()
    print(gcode.text())

    # Streaming: apply each new position as soon as it is produced
    printer = PrintingGenerator()
    printer.init()
    machine.process(Statement.of(G=1, Z=5))
    status = handle_position_at_index(machine, -1, printer)
    raise SystemExit(0 if status.ok else 1)


if __name__ == "__main__":
    main()
