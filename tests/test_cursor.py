"""Tests for cursor infrastructure.

Validates the immutable Cursor, ParseResult and the mutable ParserState
slot that backtracking combinators save and restore.
"""

from __future__ import annotations

import logging

import pytest

from parsecengine.cursor import Cursor, ParseResult, ParserState

# ============================================================================
# CURSOR BASIC TESTS
# ============================================================================


class TestCursorBasic:
    """Test basic cursor functionality."""

    def test_create_cursor(self) -> None:
        """Create cursor at position 0."""
        cursor = Cursor("hello", 0)

        assert cursor.source == "hello"
        assert cursor.pos == 0
        assert not cursor.is_eof

    def test_cursor_immutability(self) -> None:
        """Cursor is immutable (frozen dataclass)."""
        cursor = Cursor("hello", 0)

        with pytest.raises(AttributeError):
            cursor.pos = 5  # type: ignore[misc]

    def test_cursors_compare_by_value(self) -> None:
        """Two cursors at the same position over the same text are equal."""
        assert Cursor("abc", 1) == Cursor("abc", 1)
        assert Cursor("abc", 1) != Cursor("abc", 2)


# ============================================================================
# EOF AND CHARACTER ACCESS
# ============================================================================


class TestCursorAccess:
    """Test EOF detection and character access."""

    def test_is_eof_true_at_end(self) -> None:
        """is_eof is True at end of source."""
        assert Cursor("hello", 5).is_eof

    def test_is_eof_true_for_empty_source(self) -> None:
        """is_eof is True for empty source at position 0."""
        assert Cursor("", 0).is_eof

    def test_current_in_middle(self) -> None:
        """Get current character in middle."""
        assert Cursor("hello", 2).current == "l"

    def test_current_raises_eof_error_at_end(self) -> None:
        """Accessing current at EOF raises EOFError."""
        with pytest.raises(EOFError, match="unexpected end of string"):
            _ = Cursor("hello", 5).current

    def test_slice_ahead_stops_at_eof(self) -> None:
        """slice_ahead returns fewer characters near EOF."""
        cursor = Cursor("hello", 3)

        assert cursor.slice_ahead(2) == "lo"
        assert cursor.slice_ahead(10) == "lo"
        assert cursor.pos == 3


# ============================================================================
# ADVANCE
# ============================================================================


class TestCursorAdvance:
    """Test cursor advancement."""

    def test_advance_returns_new_cursor(self) -> None:
        """advance() leaves the original cursor untouched."""
        cursor = Cursor("hello", 0)
        moved = cursor.advance(2)

        assert cursor.pos == 0
        assert moved.pos == 2
        assert moved.source is cursor.source

    def test_advance_clamps_at_end(self) -> None:
        """Advancing past the end stops at len(source)."""
        assert Cursor("hi", 1).advance(10).pos == 2


# ============================================================================
# LINE AND COLUMN
# ============================================================================


class TestCursorLineCol:
    """Test line:column computation for error reporting."""

    @pytest.mark.parametrize(
        ("pos", "expected"),
        [
            (0, (1, 1)),
            (4, (1, 5)),
            (6, (2, 1)),
            (8, (2, 3)),
            (12, (3, 1)),
        ],
    )
    def test_compute_line_col(self, pos: int, expected: tuple[int, int]) -> None:
        """Lines and columns are 1-indexed."""
        assert Cursor("line1\nline2\nline3", pos).compute_line_col() == expected


# ============================================================================
# PARSE RESULT
# ============================================================================


class TestParseResult:
    """Test ParseResult container."""

    def test_holds_value_and_cursor(self) -> None:
        """ParseResult pairs a value with the cursor after it."""
        cursor = Cursor("hello", 0)
        result = ParseResult("h", cursor.advance())

        assert result.value == "h"
        assert result.cursor.pos == 1

    def test_is_frozen(self) -> None:
        """ParseResult is immutable."""
        result = ParseResult(1, Cursor("x", 0))

        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]


# ============================================================================
# PARSER STATE
# ============================================================================


class TestParserState:
    """Test the mutable cursor slot."""

    def test_unbound_state_is_empty(self) -> None:
        """A state built without text behaves as empty input."""
        state = ParserState()

        assert state.text == ""
        assert state.offset == 0
        assert state.cursor.is_eof

    def test_commit_installs_result_cursor(self) -> None:
        """commit() moves the offset to the result's cursor."""
        state = ParserState("abc")
        state.commit(ParseResult("ab", state.cursor.advance(2)))

        assert state.offset == 2

    def test_mark_and_restore(self) -> None:
        """restore() reinstates an earlier mark exactly."""
        state = ParserState("abc")
        mark = state.mark()
        state.commit(ParseResult("abc", mark.advance(3)))

        state.restore(mark)

        assert state.offset == 0
        assert state.cursor is mark

    def test_reset_with_text_rebinds_and_rewinds(self) -> None:
        """reset(text) replaces the input and zeroes the offset."""
        state = ParserState("abc")
        state.commit(ParseResult("a", state.cursor.advance()))

        state.reset("xyz!")

        assert state.text == "xyz!"
        assert state.offset == 0

    def test_reset_without_text_keeps_input(self) -> None:
        """reset() with no text only rewinds."""
        state = ParserState("abc")
        state.commit(ParseResult("ab", state.cursor.advance(2)))

        state.reset()

        assert state.text == "abc"
        assert state.offset == 0

    def test_reset_logs_length(self, caplog: pytest.LogCaptureFixture) -> None:
        """reset() emits a debug record with the new text length."""
        state = ParserState()

        with caplog.at_level(logging.DEBUG, logger="parsecengine.cursor"):
            state.reset("hello")

        assert "5 characters" in caplog.text

    def test_repr(self) -> None:
        """repr shows offset and length, not the whole text."""
        assert repr(ParserState("abc")) == "ParserState(offset=0, length=3)"
