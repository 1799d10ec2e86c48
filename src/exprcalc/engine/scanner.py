"""Lexical primitives for the expression grammar.

There is no separate tokenization pass: the parser asks the scanner for the
next numeral, identifier or operator at the current position, so what counts
as a token depends on what the grammar expects there.

Whitespace is skipped before every token, never inside one.
"""

import re

from exprcalc.engine.domain import IDENTIFIER_PATTERN

WHITESPACE_PATTERN = re.compile(r"\s*")

# Digits, optionally followed by a point and at least one more digit
NUMERAL_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?")


class Scanner:
    """Cursor over one input string.

    A scanner holds the only mutable state of a parse, so each call to
    Parser.parse() gets its own.

    Usage:
        scanner = Scanner("2 + x")
        scanner.numeral()   # "2"
        scanner.literal("+")  # True
    """

    def __init__(self, source: str):
        self.source = source
        self.position = 0

    def skip_whitespace(self) -> int:
        """Skip whitespace and return the position of the next token."""
        match = WHITESPACE_PATTERN.match(self.source, self.position)
        self.position = match.end()
        return self.position

    def peek(self) -> str:
        """Return the next non-whitespace character, or "" at end of input."""
        self.skip_whitespace()
        return self.source[self.position:self.position + 1]

    def literal(self, text: str) -> bool:
        """Consume the exact text if it comes next."""
        self.skip_whitespace()
        if self.source.startswith(text, self.position):
            self.position += len(text)
            return True
        return False

    def numeral(self) -> str | None:
        """Consume a numeral, longest match, and return its text."""
        return self._consume(NUMERAL_PATTERN)

    def identifier(self) -> str | None:
        """Consume an identifier, longest match, and return its text."""
        return self._consume(IDENTIFIER_PATTERN)

    def _consume(self, pattern: re.Pattern[str]) -> str | None:
        self.skip_whitespace()
        match = pattern.match(self.source, self.position)
        if match is None:
            return None
        self.position = match.end()
        return match.group()
