"""
Statement accessor for parsed G-code.

A statement is one block of G-code: an ordered list of words, each a letter
and a numeric value (``G1 X10 Y-2.5 F300`` has four words).
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from cncvm.utils.errors import MissingWordError


@dataclass(frozen=True)
class Word:
    """A single letter/value pair"""

    letter: str
    value: float

    def __str__(self):
        return f"{self.letter}{self.value:.10g}"


class Statement:
    """Ordered words of one G-code block with letter lookups"""

    __slots__ = ("words", "line_number")

    def __init__(self, words: Iterable[Word] = (), line_number: int | None = None):
        self.words: tuple[Word, ...] = tuple(words)
        self.line_number = line_number

    @classmethod
    def of(cls, **values: float) -> "Statement":
        """Build a statement from keyword letters, e.g. ``Statement.of(X=1, Y=2)``."""
        return cls(Word(letter.upper(), float(value)) for letter, value in values.items())

    def get(self, letter: str) -> float:
        """
        Value of the first word with the given letter.

        Raises:
            MissingWordError: the statement has no such word
        """
        for word in self.words:
            if word.letter == letter:
                return word.value
        raise MissingWordError(letter)

    def get_default(self, letter: str, default: float) -> float:
        """Value of the first word with the given letter, or ``default``."""
        for word in self.words:
            if word.letter == letter:
                return word.value
        return default

    def has(self, letter: str) -> bool:
        return any(word.letter == letter for word in self.words)

    def values(self, letter: str) -> list[float]:
        """All values for a letter, in order (a block may carry several G words)."""
        return [word.value for word in self.words if word.letter == letter]

    def __iter__(self) -> Iterator[Word]:
        return iter(self.words)

    def __len__(self) -> int:
        return len(self.words)

    def __eq__(self, other):
        if not isinstance(other, Statement):
            return NotImplemented
        return self.words == other.words

    def __repr__(self):
        return f"Statement({' '.join(str(w) for w in self.words)!r})"

    def __str__(self):
        return " ".join(str(w) for w in self.words)
