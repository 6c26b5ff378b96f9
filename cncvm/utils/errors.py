"""
Custom exception types for the cncvm interpreter and export pipeline.
Keep this focused and non-redundant; prefer built-ins where appropriate.
"""


class CncVmError(RuntimeError):
    """Base class for all cncvm failures."""

    prefix = "CNCVM ERROR"

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"{self.prefix}: {message}")

    def __str__(self):
        return f"{self.prefix}: {self.original_message}"


class MissingWordError(CncVmError):
    """A statement does not carry the requested word."""

    prefix = "Missing Word"

    def __init__(self, letter: str):
        self.letter = letter
        super().__init__(f"no {letter} word in statement")


class GcodeSyntaxError(CncVmError):
    """A line of G-code could not be tokenized."""

    prefix = "Syntax Error"

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class UnsupportedWordError(CncVmError):
    """The interpreter does not know how to execute a word."""

    prefix = "Unsupported Word"


class ArcError(CncVmError):
    """Arc geometry could not be approximated."""

    prefix = "Arc Error"


class DegenerateArcError(ArcError):
    """Start or end point coincides with the arc center."""

    def __init__(self, message: str = "Invalid arc statement: zero radius"):
        super().__init__(message)


class NonCircularArcError(ArcError):
    """Start and end radii differ by more than the accepted tolerance."""

    def __init__(self, deviation_percent: float):
        self.deviation_percent = deviation_percent
        super().__init__(f"Radius deviation of {deviation_percent:f} percent")


class InvalidArcError(ArcError):
    """Arc parameters are malformed (e.g. a negative turn count)."""


class StatementError(CncVmError):
    """A statement failed while running a program."""

    prefix = "Statement Error"

    def __init__(self, index: int, cause: Exception):
        self.index = index
        self.cause = cause
        super().__init__(f"statement {index}: {cause}")


class ReactionError(CncVmError):
    """A generator reaction raised while a position was being dispatched."""

    prefix = "Reaction Error"

    def __init__(self, generator, cause: Exception):
        self.generator = generator
        self.cause = cause
        super().__init__(f"{type(generator).__name__}: {cause}")
