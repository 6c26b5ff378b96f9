"""
G-code parser for cncvm

Tokenizes G-code lines into statements of letter/value words.
Supports parenthesized and semicolon comments, N line numbers and
compact notation such as ``G1X10Y-2.5``.
"""

import logging
import re

from cncvm.utils.errors import GcodeSyntaxError

from .statement import Statement, Word

logger = logging.getLogger(__name__)


class GcodeParser:
    """G-code parser that tokenizes lines into statements"""

    # Regex patterns for parsing
    COMMENT_PATTERN = re.compile(r"\([^)]*\)|;.*$")
    LINE_NUMBER_PATTERN = re.compile(r"^\s*N\s*(\d+)", re.IGNORECASE)
    WORD_PATTERN = re.compile(r"([A-Z])\s*([+-]?(?:\d+\.?\d*|\.\d+))")

    def __init__(self):
        self.line_count = 0
        self.errors: list[str] = []

    def parse_line(self, line: str) -> Statement | None:
        """
        Parse a single line of G-code

        Args:
            line: Raw G-code line

        Returns:
            Statement for the line, or None if it carries no words

        Raises:
            GcodeSyntaxError: the line holds text that is not a word
        """
        self.line_count += 1

        line = self.COMMENT_PATTERN.sub(" ", line)
        if "(" in line:
            raise GcodeSyntaxError("unterminated comment", self.line_count)

        # Program delimiters carry no words
        if line.strip() == "%":
            return None

        # Block numbers are dropped; statements carry the physical line
        line_num_match = self.LINE_NUMBER_PATTERN.match(line)
        if line_num_match:
            line = line[line_num_match.end() :]

        line = line.upper()
        words: list[Word] = []
        pos = 0
        for match in self.WORD_PATTERN.finditer(line):
            gap = line[pos : match.start()]
            if gap.strip():
                raise GcodeSyntaxError(f"unexpected text {gap.strip()!r}", self.line_count)
            words.append(Word(match.group(1), float(match.group(2))))
            pos = match.end()

        rest = line[pos:]
        if rest.strip():
            raise GcodeSyntaxError(f"unexpected text {rest.strip()!r}", self.line_count)

        if not words:
            return None
        return Statement(words, line_number=self.line_count)

    def parse_program(self, program: str | list[str]) -> list[Statement]:
        """
        Parse a complete G-code program

        Lines that fail to parse are recorded in ``errors`` and skipped.

        Args:
            program: Either a string with newlines or a list of lines

        Returns:
            List of all statements in the program
        """
        if isinstance(program, str):
            lines = program.split("\n")
        else:
            lines = program

        statements = []
        self.errors = []
        self.line_count = 0

        for line in lines:
            try:
                stmt = self.parse_line(line)
            except GcodeSyntaxError as e:
                logger.debug("Skipping line %d: %s", self.line_count, e)
                self.errors.append(str(e))
                continue
            if stmt is not None:
                statements.append(stmt)

        return statements

    def get_errors(self) -> list[str]:
        """Get list of parsing errors"""
        return self.errors
