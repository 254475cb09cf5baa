"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic record carried by
every parse failure and grammar error.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass, field
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Grammar errors (programmer mistakes, never backtracked)
        3000-3999: Parse failures (input did not match, recoverable)
    """

    # Grammar errors (1000-1999)
    INVALID_PARSER_COLLECTION = 1001
    PARSER_NOT_CALLABLE = 1002
    INVALID_CHARACTER_ARGUMENT = 1003
    INVALID_LITERAL_ARGUMENT = 1004
    INVALID_PATTERN = 1005
    ZERO_WIDTH_REPETITION = 1006
    FORWARD_NOT_DEFINED = 1007
    FORWARD_ALREADY_DEFINED = 1008
    MAX_DEPTH_EXCEEDED = 1009

    # Parse failures (3000-3999)
    UNEXPECTED_EOF = 3001
    UNEXPECTED_CHARACTER = 3002
    NOT_AT_END = 3003
    LITERAL_MISMATCH = 3004
    PATTERN_NO_MATCH = 3005
    INVALID_MATCH_ATTEMPT = 3006
    CHOICES_EXHAUSTED = 3007
    RULE_REJECTED = 3008


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        offset: Character offset where the problem occurred (None for
            grammar errors raised at construction time)
        hint: Suggestion for fixing the error
        expected: What the parser expected to find (may be empty)
    """

    code: DiagnosticCode
    message: str
    offset: int | None = None
    hint: str | None = None
    expected: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate that offsets are never negative.

        Raises:
            ValueError: If offset is negative
        """
        if self.offset is not None and self.offset < 0:
            msg = f"Diagnostic.offset must be >= 0, got {self.offset}"
            raise ValueError(msg)

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    @property
    def is_parse_failure(self) -> bool:
        """True for recoverable input-matching failures (3000-3999)."""
        return 3000 <= self.code.value < 4000

    def format_error(self) -> str:
        """Format diagnostic as a single user-facing line.

        Delegates to DiagnosticFormatter with its default output format.

        Example output:
            parse error: got character b instead of a at position 0

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
