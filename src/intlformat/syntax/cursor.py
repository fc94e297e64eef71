"""Immutable cursor infrastructure for template compilation.

Implements the immutable cursor pattern used by the message compiler.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column computed on-demand (only for errors)
"""

from dataclasses import dataclass

from intlformat.diagnostics import SourceSpan

__all__ = ["WHITESPACE", "Cursor", "ParseResult"]

# ICU Pattern_White_Space subset that appears in hand-written templates.
WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v\u200e\u200f\u2028\u2029")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> cursor.advance().current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos."""
        return self.source[self.pos : end_pos]

    def skip_whitespace(self) -> "Cursor":
        """Skip ICU pattern whitespace.

        Example:
            >>> Cursor("  \\n hello", 0).skip_whitespace().pos
            4
        """
        c = self
        while not c.is_eof and c.current in WHITESPACE:
            c = c.advance()
        return c

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise."""
        if not self.is_eof and self.current == char:
            return self.advance()
        return None

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Example:
            >>> Cursor("ab\\ncd", 4).compute_line_col()
            (2, 2)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)

    def span(self, length: int = 0) -> SourceSpan:
        """Build a SourceSpan starting here, for error reporting."""
        line, col = self.compute_line_col()
        end = min(self.pos + length, len(self.source))
        return SourceSpan(start=self.pos, end=max(end, self.pos), line=line, column=col)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parse result: the parsed value plus the cursor after it.

    Example:
        >>> result = ParseResult("name", Cursor("{name}", 5))
        >>> result.value, result.cursor.current
        ('name', '}')
    """

    value: T
    cursor: Cursor
