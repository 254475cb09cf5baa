"""Message text for every parse failure and grammar error.

Each ErrorTemplate method returns a Diagnostic; exceptions are built
from these and never from ad hoc strings inside the engine.
"""

from parsecengine.constants import MAX_SNIPPET_LENGTH

from .codes import Diagnostic, DiagnosticCode


def _snippet(text: str) -> str:
    """Cut found-text to MAX_SNIPPET_LENGTH for display."""
    if len(text) > MAX_SNIPPET_LENGTH:
        return text[:MAX_SNIPPET_LENGTH] + "..."
    return text


class ErrorTemplate:
    """Diagnostic factories, grouped by code range."""

    # =========================================================================
    # PARSE FAILURES (3000-3999)
    # =========================================================================

    @staticmethod
    def unexpected_eof(offset: int) -> Diagnostic:
        """Input ended where a primitive needed more text.

        Args:
            offset: The offset where EOF was encountered

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message="unexpected end of string",
            offset=offset,
            hint="The input ended before the grammar was satisfied",
        )

    @staticmethod
    def unexpected_character(expected: str, actual: str, offset: int) -> Diagnostic:
        """Single character mismatch.

        Args:
            expected: Character the parser wanted
            actual: Character found at offset
            offset: Offset of the mismatching character

        Returns:
            Diagnostic for UNEXPECTED_CHARACTER
        """
        msg = f"got character {actual} instead of {expected}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_CHARACTER,
            message=msg,
            offset=offset,
            expected=(expected,),
        )

    @staticmethod
    def literal_mismatch(expected: str, found: str, offset: int) -> Diagnostic:
        """Literal string mismatch.

        Args:
            expected: The literal the parser wanted
            found: Text found at offset (same length as expected, or shorter at EOF)
            offset: Offset where the literal should have started

        Returns:
            Diagnostic for LITERAL_MISMATCH
        """
        msg = f"expected literal {_snippet(expected)!r}, got {_snippet(found)!r}"
        return Diagnostic(
            code=DiagnosticCode.LITERAL_MISMATCH,
            message=msg,
            offset=offset,
            expected=(expected,),
        )

    @staticmethod
    def pattern_no_match(pattern: str, offset: int) -> Diagnostic:
        """Regular expression did not match at offset.

        Args:
            pattern: Source text of the pattern
            offset: Offset where the match was anchored

        Returns:
            Diagnostic for PATTERN_NO_MATCH
        """
        msg = f"could not match expression {pattern}"
        return Diagnostic(
            code=DiagnosticCode.PATTERN_NO_MATCH,
            message=msg,
            offset=offset,
            expected=(pattern,),
        )

    @staticmethod
    def invalid_match_attempt(pattern: str, offset: int, reason: str) -> Diagnostic:
        """Regular expression engine gave up during a match.

        Args:
            pattern: Source text of the pattern
            offset: Offset where the match was anchored
            reason: Exception text reported by the engine

        Returns:
            Diagnostic for INVALID_MATCH_ATTEMPT
        """
        msg = f"invalid match attempt for expression {pattern}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_MATCH_ATTEMPT,
            message=msg,
            offset=offset,
            hint="Simplify the expression or shorten the input",
        )

    @staticmethod
    def not_at_end(offset: int) -> Diagnostic:
        """Trailing input after the grammar finished.

        Args:
            offset: Offset of the first unconsumed character

        Returns:
            Diagnostic for NOT_AT_END
        """
        return Diagnostic(
            code=DiagnosticCode.NOT_AT_END,
            message="not at end of string",
            offset=offset,
            hint="Trailing input remains after the grammar finished",
        )

    @staticmethod
    def choices_exhausted(offset: int) -> Diagnostic:
        """Every alternative of a choice failed.

        Args:
            offset: Offset where the alternation began

        Returns:
            Diagnostic for CHOICES_EXHAUSTED
        """
        return Diagnostic(
            code=DiagnosticCode.CHOICES_EXHAUSTED,
            message="ran out of choices",
            offset=offset,
        )

    @staticmethod
    def rule_rejected(message: str, offset: int) -> Diagnostic:
        """Grammar rule rejected otherwise well-formed input.

        Args:
            message: Reason supplied by the grammar author
            offset: Offset where the rule gave up

        Returns:
            Diagnostic for RULE_REJECTED
        """
        return Diagnostic(
            code=DiagnosticCode.RULE_REJECTED,
            message=message,
            offset=offset,
        )

    # =========================================================================
    # GRAMMAR ERRORS (1000-1999)
    # =========================================================================

    @staticmethod
    def invalid_parser_collection(combinator: str, received: object) -> Diagnostic:
        """Combinator received something other than an ordered collection.

        Args:
            combinator: Name of the combinator being constructed
            received: The offending argument

        Returns:
            Diagnostic for INVALID_PARSER_COLLECTION
        """
        msg = (
            f"The method {combinator} only accepts a list or tuple of parsers, "
            f"got {type(received).__name__}"
        )
        return Diagnostic(
            code=DiagnosticCode.INVALID_PARSER_COLLECTION,
            message=msg,
            hint="Materialize generators and iterators with list() first",
        )

    @staticmethod
    def parser_not_callable(combinator: str, received: object) -> Diagnostic:
        """Collection element is not a zero-argument callable.

        Args:
            combinator: Name of the combinator being constructed
            received: The offending element

        Returns:
            Diagnostic for PARSER_NOT_CALLABLE
        """
        msg = f"The method {combinator} received a non-callable {type(received).__name__}"
        return Diagnostic(
            code=DiagnosticCode.PARSER_NOT_CALLABLE,
            message=msg,
            hint="Pass the parser itself, not the result of calling it",
        )

    @staticmethod
    def invalid_character_argument(received: object) -> Diagnostic:
        """char() requires exactly one character."""
        msg = f"char() expects a single character, got {received!r}"
        return Diagnostic(code=DiagnosticCode.INVALID_CHARACTER_ARGUMENT, message=msg)

    @staticmethod
    def invalid_literal_argument(received: object) -> Diagnostic:
        """literal() requires a string."""
        msg = f"literal() expects a string, got {type(received).__name__}"
        return Diagnostic(code=DiagnosticCode.INVALID_LITERAL_ARGUMENT, message=msg)

    @staticmethod
    def invalid_pattern(pattern: str, reason: str) -> Diagnostic:
        """Regular expression failed to compile.

        Args:
            pattern: Source text of the pattern
            reason: Compiler error text

        Returns:
            Diagnostic for INVALID_PATTERN
        """
        msg = f"Invalid expression {pattern!r}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_PATTERN,
            message=msg,
            hint="Patterns use Python re syntax",
        )

    @staticmethod
    def zero_width_repetition(combinator: str, offset: int) -> Diagnostic:
        """Repetition body succeeded without consuming input.

        Args:
            combinator: Name of the repeating combinator
            offset: Offset where the loop stalled

        Returns:
            Diagnostic for ZERO_WIDTH_REPETITION
        """
        msg = f"{combinator} body succeeded without consuming input and would loop forever"
        return Diagnostic(
            code=DiagnosticCode.ZERO_WIDTH_REPETITION,
            message=msg,
            offset=offset,
            hint="Repeat a parser that always consumes at least one character",
        )

    @staticmethod
    def forward_not_defined(name: str) -> Diagnostic:
        """Forward parser invoked before define()."""
        msg = f"Forward parser {name!r} was invoked before it was defined"
        return Diagnostic(
            code=DiagnosticCode.FORWARD_NOT_DEFINED,
            message=msg,
            hint="Call define() on the forward parser once the rule exists",
        )

    @staticmethod
    def forward_already_defined(name: str) -> Diagnostic:
        """Forward parser defined twice."""
        msg = f"Forward parser {name!r} is already defined"
        return Diagnostic(code=DiagnosticCode.FORWARD_ALREADY_DEFINED, message=msg)

    @staticmethod
    def depth_exceeded(max_depth: int, offset: int | None = None) -> Diagnostic:
        """Grammar rule nesting exceeded the configured limit.

        Args:
            max_depth: Maximum allowed nesting depth
            offset: Offset reached when the limit tripped

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum rule nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            offset=offset,
            hint="Reduce nesting in the input or raise max_depth",
        )
