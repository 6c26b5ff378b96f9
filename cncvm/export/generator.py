"""
Generator contract for replaying a position history.

A generator keeps the last position it has been told about and receives
one call per kind of state change. Dispatch decides which calls to make.
"""

from abc import ABC, abstractmethod

from cncvm.vm.state import CutterCompensation, FeedMode, MoveMode, Position


class CodeGenerator(ABC):
    """Output backend receiving minimal change notifications"""

    @abstractmethod
    def get_position(self) -> Position:
        """Last position this generator has observed."""

    @abstractmethod
    def set_position(self, pos: Position) -> None:
        """Record the position this generator now reflects."""

    @abstractmethod
    def toolchange(self, tool: int | None) -> None: ...

    @abstractmethod
    def spindle(self, enabled: bool, clockwise: bool, speed: float) -> None: ...

    @abstractmethod
    def coolant(self, flood: bool, mist: bool) -> None: ...

    @abstractmethod
    def feed_mode(self, mode: FeedMode) -> None: ...

    @abstractmethod
    def feedrate(self, rate: float) -> None: ...

    @abstractmethod
    def cutter_compensation(self, mode: CutterCompensation) -> None: ...

    @abstractmethod
    def move(self, x: float, y: float, z: float, move_mode: MoveMode) -> None: ...

    @abstractmethod
    def init(self) -> None:
        """Reset the generator before a replay."""

    @property
    def position(self) -> Position:
        return self.get_position()

    @position.setter
    def position(self, pos: Position) -> None:
        self.set_position(pos)


class BaseGenerator(CodeGenerator):
    """
    Generator with position bookkeeping and no-op reactions.

    Subclasses override only the reactions they care about.
    """

    def __init__(self):
        self._position = Position()

    def get_position(self) -> Position:
        return self._position

    def set_position(self, pos: Position) -> None:
        self._position = pos

    def toolchange(self, tool: int | None) -> None:
        pass

    def spindle(self, enabled: bool, clockwise: bool, speed: float) -> None:
        pass

    def coolant(self, flood: bool, mist: bool) -> None:
        pass

    def feed_mode(self, mode: FeedMode) -> None:
        pass

    def feedrate(self, rate: float) -> None:
        pass

    def cutter_compensation(self, mode: CutterCompensation) -> None:
        pass

    def move(self, x: float, y: float, z: float, move_mode: MoveMode) -> None:
        pass

    def init(self) -> None:
        """Reset the cursor to the origin with nothing set."""
        self._position = Position()
