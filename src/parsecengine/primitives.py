"""Primitive matchers.

Pure functions from a Cursor to a ParseResult. They never touch shared
state: on success they return the value together with the advanced
cursor, on mismatch they raise ParseFailure carrying the cursor they
were given. ParserEngine wraps each of them into a zero-argument Parser
bound to its ParserState.
"""

import re

from parsecengine.cursor import Cursor, ParseResult
from parsecengine.diagnostics import ErrorTemplate, ParseFailure

__all__ = ["match_char", "match_end", "match_literal", "match_pattern"]


def match_end(cursor: Cursor) -> ParseResult[str]:
    """Succeed with "" only when the cursor sits at end of input.

    Example:
        >>> match_end(Cursor("ab", 2)).value
        ''
    """
    if not cursor.is_eof:
        raise ParseFailure(ErrorTemplate.not_at_end(cursor.pos), cursor=cursor)
    return ParseResult("", cursor)


def match_char(cursor: Cursor, expected: str) -> ParseResult[str]:
    """Match exactly one character.

    Args:
        cursor: Current position in source
        expected: The single character to match

    Returns:
        ParseResult(expected, cursor advanced by one)

    Raises:
        ParseFailure: At EOF, or on mismatch (at the pre-advance offset)
    """
    if cursor.is_eof:
        raise ParseFailure(ErrorTemplate.unexpected_eof(cursor.pos), cursor=cursor)
    actual = cursor.current
    if actual != expected:
        raise ParseFailure(
            ErrorTemplate.unexpected_character(expected, actual, cursor.pos),
            cursor=cursor,
        )
    return ParseResult(expected, cursor.advance())


def match_literal(cursor: Cursor, expected: str) -> ParseResult[str]:
    """Match a literal string atomically.

    Compares the whole slice at once, so a failed match never leaves a
    partially advanced cursor behind.

    Example:
        >>> match_literal(Cursor("foobar", 0), "foo").cursor.pos
        3
    """
    found = cursor.slice_ahead(len(expected))
    if found == expected:
        return ParseResult(expected, cursor.advance(len(expected)))
    if cursor.is_eof:
        raise ParseFailure(ErrorTemplate.unexpected_eof(cursor.pos), cursor=cursor)
    raise ParseFailure(
        ErrorTemplate.literal_mismatch(expected, found, cursor.pos),
        cursor=cursor,
    )


def match_pattern(cursor: Cursor, compiled: re.Pattern[str]) -> ParseResult[str]:
    """Match a compiled regular expression anchored at the cursor.

    Uses Pattern.match(source, pos) so the remaining text is never sliced.
    At EOF this fails even for patterns that could match empty text.

    Raises:
        ParseFailure: At EOF, on no match, or when the regex engine gives
            up mid-match (INVALID_MATCH_ATTEMPT)
    """
    if cursor.is_eof:
        raise ParseFailure(ErrorTemplate.unexpected_eof(cursor.pos), cursor=cursor)
    try:
        match = compiled.match(cursor.source, cursor.pos)
    except (RecursionError, OverflowError, MemoryError) as e:
        raise ParseFailure(
            ErrorTemplate.invalid_match_attempt(compiled.pattern, cursor.pos, str(e)),
            cursor=cursor,
        ) from e
    if match is None:
        raise ParseFailure(
            ErrorTemplate.pattern_no_match(compiled.pattern, cursor.pos),
            cursor=cursor,
        )
    text = match.group(0)
    return ParseResult(text, cursor.advance(len(text)))
