"""Cursor infrastructure for backtracking parsers.

Two layers:
    - Cursor: immutable (source, pos) snapshot. Advancing returns a new
      cursor, so a saved cursor is a backtrack point that later parsing
      can never disturb.
    - ParserState: the single mutable slot a parse session shares. It
      holds the current Cursor; combinators backtrack by reinstating a
      Cursor they saved earlier.

The source string is shared by reference between cursors and is never
copied or mutated.

Pattern Reference:
    - Haskell Parsec
    - F# FParsec
"""

import logging
from dataclasses import dataclass

from parsecengine.diagnostics import ErrorTemplate

__all__ = ["Cursor", "ParseResult", "ParserState"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Cursor:
    """A position in source; advancing yields a new Cursor.

    Example:
        >>> start = Cursor("hello", 0)
        >>> start.advance(4).current, start.current
        ('o', 'h')
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
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.format_error())
        return self.source[self.pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions.

        The position is clamped to the end of the source.

        Example:
            >>> cursor = Cursor("hello", 0)
            >>> cursor.advance(3).pos
            3
            >>> cursor.advance(10).pos
            5
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_ahead(self, n: int) -> str:
        """Get next n characters without advancing cursor.

        May return fewer characters if near EOF.
        """
        return self.source[self.pos : self.pos + n]

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position. Only call for error reporting.

        Example:
            >>> source = "line1\\nline2\\nline3"
            >>> Cursor(source, 0).compute_line_col()
            (1, 1)
            >>> Cursor(source, 8).compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parsed value plus the cursor positioned after it.

    Every primitive matcher has signature:
        def match_foo(cursor: Cursor, ...) -> ParseResult[Foo]

    and raises ParseFailure instead of returning on mismatch.
    """

    value: T
    cursor: Cursor


class ParserState:
    """Mutable cursor slot shared by every parser of one engine.

    Invariant: 0 <= offset <= len(text).

    Thread Safety:
        NOT thread-safe. One state serves one parse at a time; sequential
        reuse goes through reset().

    Example:
        >>> state = ParserState("abc")
        >>> mark = state.mark()
        >>> state.commit(ParseResult("a", mark.advance()))
        >>> state.offset
        1
        >>> state.restore(mark)
        >>> state.offset
        0
    """

    __slots__ = ("_cursor",)

    def __init__(self, text: str | None = None) -> None:
        """Bind the state to text (None behaves as empty input)."""
        self._cursor = Cursor(text if text is not None else "", 0)

    @property
    def text(self) -> str:
        """Input text of the current session."""
        return self._cursor.source

    @property
    def offset(self) -> int:
        """Current scan offset."""
        return self._cursor.pos

    @property
    def cursor(self) -> Cursor:
        """Current immutable cursor."""
        return self._cursor

    def reset(self, text: str | None = None) -> None:
        """Rebind to new text (if given) and rewind the offset to zero."""
        source = text if text is not None else self._cursor.source
        self._cursor = Cursor(source, 0)
        logger.debug("Parser state reset: %d characters", len(source))

    def mark(self) -> Cursor:
        """Return a backtrack point for the current position."""
        return self._cursor

    def restore(self, mark: Cursor) -> None:
        """Reinstate a backtrack point returned by mark()."""
        self._cursor = mark

    def commit(self, result: ParseResult[object]) -> None:
        """Install the cursor of a successful match."""
        self._cursor = result.cursor

    def __repr__(self) -> str:
        return f"ParserState(offset={self.offset}, length={len(self.text)})"
