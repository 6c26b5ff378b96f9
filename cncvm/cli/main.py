"""
CLI entry point for the cncvm command.

Reads a G-code file, runs it through the machine (linearizing arcs) and
writes the replayed program as plain G-code.
"""

import argparse
import logging
import sys
from pathlib import Path

from cncvm.config import LOG_LEVEL_DEFAULT, MAX_ARC_DEVIATION, MIN_ARC_LINE_LENGTH, TRACE
from cncvm.export import GcodeGenerator, handle_all_positions
from cncvm.gcode import GcodeParser
from cncvm.utils.errors import CncVmError
from cncvm.vm import Machine, MachineConfig

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Linearize arcs and normalize a G-code program")
    parser.add_argument("input", type=Path, help="G-code file to read")
    parser.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    parser.add_argument(
        "--max-arc-deviation", type=float, default=MAX_ARC_DEVIATION, help="Maximum chord deviation in mm"
    )
    parser.add_argument(
        "--min-arc-line-length", type=float, default=MIN_ARC_LINE_LENGTH, help="Minimum arc segment length in mm"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE"
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Enable quiet logging (WARNING level)")
    parser.add_argument(
        "--log-level", choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], help="Set specific log level"
    )
    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.log_level:
        return TRACE if args.log_level == "TRACE" else getattr(logging, args.log_level)
    if args.verbose >= 3:
        return TRACE
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.WARNING
    level = logging.getLevelName(LOG_LEVEL_DEFAULT)
    return level if isinstance(level, int) else logging.INFO


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=_log_level(args),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        machine_config = MachineConfig(
            max_arc_deviation=args.max_arc_deviation,
            min_arc_line_length=args.min_arc_line_length,
        )
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    try:
        program = args.input.read_text()
    except OSError as e:
        logger.error("Failed to read %s: %s", args.input, e)
        return 1

    parser = GcodeParser()
    statements = parser.parse_program(program)
    if parser.get_errors():
        for error in parser.get_errors():
            logger.error(error)
        return 1

    machine = Machine(machine_config)
    try:
        machine.run(statements)
    except CncVmError as e:
        logger.error("%s", e)
        return 1
    logger.info("%d statements produced %d positions", len(statements), len(machine.positions))

    generator = GcodeGenerator()
    generator.init()
    status = handle_all_positions(machine, generator)
    if not status.ok:
        logger.error("Export failed at position %s: %s", status.index, status.message)
        return 1
    generator.finish()

    if args.output:
        args.output.write_text(generator.text())
    else:
        sys.stdout.write(generator.text())
    return 0


def main_entry():
    """Entry point for the cncvm command."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
