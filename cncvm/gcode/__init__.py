"""
G-code input for cncvm

Main components:
- statement.py: Word and Statement, the letter/value accessor used by the machine
- parser.py: line tokenizer producing statements
"""

from .parser import GcodeParser
from .statement import Statement, Word

__all__ = [
    "GcodeParser",
    "Statement",
    "Word",
]
