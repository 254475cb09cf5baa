"""Exceptions raised by parsers and combinators.

Each exception carries the Diagnostic it was built from (when any).
ParseFailure is the only exception combinators catch for backtracking;
every other ParsecError propagates to the caller.
"""

from typing import TYPE_CHECKING

from parsecengine.constants import ERROR_CONTEXT_LINES

from .codes import Diagnostic, DiagnosticCode
from .templates import ErrorTemplate

if TYPE_CHECKING:
    from parsecengine.cursor import Cursor

__all__ = [
    "DepthLimitExceededError",
    "GrammarError",
    "ParseFailure",
    "ParsecError",
    "ZeroWidthRepetitionError",
]


class ParsecError(Exception):
    """Base exception for all parsecengine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize ParsecError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ParseFailure(ParsecError):
    """Input did not match at some offset.

    Recoverable: backtracking combinators catch it, restore the cursor and
    move on. When it escapes the top-level rule it is terminal for that
    parse attempt.

    Attributes:
        diagnostic: Always present for ParseFailure
        cursor: Cursor at the failure site, when known

    Example:
        >>> failure = ParseFailure(ErrorTemplate.choices_exhausted(4))
        >>> str(failure)
        'parse error: ran out of choices at position 4'
        >>> failure.offset
        4
    """

    diagnostic: Diagnostic

    def __init__(
        self,
        message: str | Diagnostic,
        offset: int | None = None,
        *,
        cursor: "Cursor | None" = None,
    ) -> None:
        """Initialize ParseFailure.

        Args:
            message: Diagnostic, or free text from a grammar rule
            offset: Failure offset for free-text messages (defaults to the
                cursor position, or 0 when neither is given)
            cursor: Cursor at the failure site, used for context rendering
        """
        if not isinstance(message, Diagnostic):
            if offset is None:
                offset = cursor.pos if cursor is not None else 0
            message = ErrorTemplate.rule_rejected(message, offset)
        super().__init__(message)
        self.cursor = cursor

    @property
    def message(self) -> str:
        """Bare failure message without prefix or position."""
        return self.diagnostic.message

    @property
    def offset(self) -> int:
        """Offset at the moment of failure."""
        offset = self.diagnostic.offset
        return offset if offset is not None else 0

    @property
    def code(self) -> DiagnosticCode:
        """Diagnostic code of this failure."""
        return self.diagnostic.code

    def format_with_context(self, context_lines: int = ERROR_CONTEXT_LINES) -> str:
        """Format failure with source context and pointer.

        Shows the problematic line and a caret pointing to the failure
        column. Falls back to the single-line form when no cursor is known.

        Args:
            context_lines: Number of lines to show before/after the failure

        Returns:
            Multi-line formatted failure with context

        Example:
            >>> from parsecengine.cursor import Cursor
            >>> source = "1 + 2\\n3 * (4"
            >>> failure = ParseFailure("expected ')'", cursor=Cursor(source, 11))
            >>> print(failure.format_with_context())
            2:6: parse error: expected ')' at position 11
            <BLANKLINE>
               1 | 1 + 2
               2 | 3 * (4
                 |      ^
        """
        if self.cursor is None:
            return str(self)

        line, col = self.cursor.compute_line_col()
        lines = self.cursor.source.split("\n")

        result_lines = [f"{line}:{col}: {self}", ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])

            if i == line:
                gutter = " " * (len(line_num_str) - 2) + "| "
                result_lines.append(gutter + " " * (col - 1) + "^")

        return "\n".join(result_lines)


class GrammarError(ParsecError, TypeError):
    """Grammar construction bug, never an input-matching outcome.

    Raised for malformed combinator arguments (e.g. a generator where an
    ordered list of parsers was required) and for misuse detected at run
    time. Backtracking combinators never catch it.
    """


class ZeroWidthRepetitionError(GrammarError):
    """Repetition body succeeded without consuming input.

    Example:
        many(many(char("a"))) on "b" ← inner many always succeeds empty!
    """


class DepthLimitExceededError(ParsecError):
    """Grammar rule nesting exceeded the engine's configured max_depth.

    This error indicates either:
    - Adversarial input designed to exhaust the call stack
    - A grammar that recurses without consuming input
    """
