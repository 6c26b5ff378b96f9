"""
Replay of a position history into generators.

Each generator is only told about what differs between its recorded position
and the target. Reaction failures are returned as a DispatchStatus rather
than raised, so a replay stops cleanly at the offending position.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from cncvm.utils.errors import ReactionError
from cncvm.vm.machine import Machine
from cncvm.vm.state import Position

from .generator import CodeGenerator

logger = logging.getLogger(__name__)


@dataclass
class DispatchStatus:
    """
    Result of dispatching one or more positions.
    """

    ok: bool
    message: str
    error: ReactionError | None = None
    index: int | None = None
    details: dict[str, Any] | None = None

    @classmethod
    def completed(cls, message: str = "Completed", index: int | None = None) -> "DispatchStatus":
        return cls(True, message, error=None, index=index)

    @classmethod
    def failed(cls, message: str, error: ReactionError, index: int | None = None) -> "DispatchStatus":
        details = {"generator": type(error.generator).__name__, "cause": type(error.cause).__name__}
        return cls(False, message, error=error, index=index, details=details)

    def __bool__(self) -> bool:
        return self.ok


def _positions_of(history: Machine | Sequence[Position]) -> Sequence[Position]:
    if isinstance(history, Machine):
        return history.positions
    return history


def _dispatch(pos: Position, gen: CodeGenerator) -> None:
    cur = gen.get_position()
    cs = cur.state
    ns = pos.state

    if ns.tool != cs.tool:
        gen.toolchange(ns.tool)

    if (
        ns.spindle_enabled != cs.spindle_enabled
        or ns.spindle_clockwise != cs.spindle_clockwise
        or ns.spindle_speed != cs.spindle_speed
    ):
        gen.spindle(ns.spindle_enabled, ns.spindle_clockwise, ns.spindle_speed)

    if ns.flood_coolant != cs.flood_coolant or ns.mist_coolant != cs.mist_coolant:
        gen.coolant(ns.flood_coolant, ns.mist_coolant)

    if ns.feed_mode != cs.feed_mode:
        gen.feed_mode(ns.feed_mode)

    if ns.feedrate != cs.feedrate:
        gen.feedrate(ns.feedrate)

    if ns.cutter_compensation != cs.cutter_compensation:
        gen.cutter_compensation(ns.cutter_compensation)

    if cur.x != pos.x or cur.y != pos.y or cur.z != pos.z:
        gen.move(pos.x, pos.y, pos.z, ns.move_mode)

    gen.set_position(pos)


def handle_position(pos: Position, *generators: CodeGenerator) -> DispatchStatus:
    """
    Bring every generator up to ``pos``, calling only the changed reactions.

    Generators are handled in order. If a reaction raises, the failing
    generator keeps its previous position, later generators are skipped and
    the failure is returned; generators already handled stay at ``pos``.
    """
    for gen in generators:
        try:
            _dispatch(pos, gen)
        except Exception as e:
            error = ReactionError(gen, e)
            logger.warning("Dispatch failed: %s", error)
            return DispatchStatus.failed(str(error), error)
    return DispatchStatus.completed()


def handle_all_positions(history: Machine | Sequence[Position], *generators: CodeGenerator) -> DispatchStatus:
    """
    Replay a whole history in order.

    Stops at the first failure; the returned status carries its index and
    the generators reflect every position before it.
    """
    positions = _positions_of(history)
    for index, pos in enumerate(positions):
        status = handle_position(pos, *generators)
        if not status.ok:
            status.index = index
            return status
    logger.debug("Replayed %d positions into %d generators", len(positions), len(generators))
    return DispatchStatus.completed(f"Replayed {len(positions)} positions")


def handle_position_at_index(
    history: Machine | Sequence[Position], idx: int, *generators: CodeGenerator
) -> DispatchStatus:
    """
    Apply one recorded position, e.g. the newest one while streaming.

    Raises:
        IndexError: ``idx`` is outside the history
    """
    if isinstance(history, Machine):
        pos = history.position_at(idx)
        count = history.position_count
    else:
        pos = history[idx]
        count = len(history)
    index = idx if idx >= 0 else count + idx
    for gen in generators:
        status = handle_position(pos, gen)
        if not status.ok:
            status.index = index
            return status
    return DispatchStatus.completed(index=index)
