"""Parser-combinator engine.

ParserEngine owns one ParserState and builds every primitive and
combinator as a zero-argument Parser closing over that state. Grammar
authors either subclass it and write rule methods, or compose its
parsers directly:

    class Calculator(ParserEngine):
        @rule
        def expression(self) -> Parser[float]:
            return self.choice_longest([self.number(), self.parenthesized()])

Backtracking contract:
    Primitives never restore the cursor on failure. Only many, choice,
    choice_longest and the optional steps of sep_by/sep_by1 catch
    ParseFailure, and each of them reinstates the cursor it saved before
    the attempt. sequence, many1's first step and the mandatory element
    after a separator propagate failures untouched. GrammarError and the
    other non-ParseFailure errors are never caught.

Thread Safety:
    NOT thread-safe. One engine serves one parse at a time; reuse it
    sequentially via reset().
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Self

from parsecengine.constants import DEFAULT_MAX_DEPTH
from parsecengine.cursor import Cursor, ParseResult, ParserState
from parsecengine.depth_guard import DepthGuard
from parsecengine.diagnostics import (
    ErrorTemplate,
    GrammarError,
    ParseFailure,
    ZeroWidthRepetitionError,
)
from parsecengine.parser import ForwardParser, Parser
from parsecengine.primitives import match_char, match_end, match_literal, match_pattern

__all__ = ["ParserEngine", "rule"]

logger = logging.getLogger(__name__)

type ParserLike[T] = Callable[[], T]


class ParserEngine:
    """Factory for parsers sharing one cursor.

    Args:
        text: Input to parse (None leaves the engine unbound until reset())
        max_depth: Nesting limit for lazy/forward rule references. None
            (default) leaves recursion bounded only by the interpreter.

    Example:
        >>> engine = ParserEngine("1,2,3")
        >>> digits = engine.sep_by1(engine.pattern(r"\\d").map(int), engine.char(","))
        >>> digits()
        [1, 2, 3]
        >>> engine.offset
        5
    """

    def __init__(self, text: str | None = None, *, max_depth: int | None = DEFAULT_MAX_DEPTH) -> None:
        self._state = ParserState(text)
        self._guard = DepthGuard(max_depth) if max_depth is not None else None

    # =========================================================================
    # SESSION
    # =========================================================================

    @property
    def state(self) -> ParserState:
        """Shared cursor slot read and written by every parser of this engine."""
        return self._state

    @property
    def text(self) -> str:
        """Input text of the current session."""
        return self._state.text

    @property
    def offset(self) -> int:
        """Current scan offset."""
        return self._state.offset

    @property
    def max_depth(self) -> int | None:
        """Effective nesting limit, after clamping (None when unlimited)."""
        return self._guard.max_depth if self._guard is not None else None

    def reset(self, text: str | None = None) -> Self:
        """Rebind to new text (if given) and rewind to offset zero.

        Parsers built earlier stay valid: they close over the same state.

        Returns:
            self, for chaining: engine.reset(line).expression()
        """
        self._state.reset(text)
        if self._guard is not None:
            self._guard.reset()
        return self

    def failure(self, message: str) -> ParseFailure:
        """Build a ParseFailure at the current offset.

        For rule bodies that reject input the primitives accepted:
            raise self.failure(f"Invalid operator: {op}")
        """
        return ParseFailure(message, cursor=self._state.cursor)

    def parse[T](self, parser: ParserLike[T], text: str | None = None, *, complete: bool = True) -> T:
        """Run parser from offset zero and return its value.

        Args:
            parser: Parser to run
            text: New input (None re-parses the current text)
            complete: Also require end of input after parser succeeds

        Raises:
            ParseFailure: If the input does not match
        """
        self.reset(text)
        logger.debug("Parsing %d characters with %r", len(self.text), parser)
        value = parser()
        if complete:
            self.end()()
        logger.debug("Parse finished at offset %d", self.offset)
        return value

    # =========================================================================
    # PRIMITIVES
    # =========================================================================

    def _primitive[T](self, matcher: Callable[[Cursor], ParseResult[T]], name: str) -> Parser[T]:
        state = self._state

        def run() -> T:
            result = matcher(state.cursor)
            state.commit(result)
            return result.value

        return Parser(run, name)

    def end(self) -> Parser[str]:
        """Succeed with "" only at end of input; never advances."""
        return self._primitive(match_end, "end")

    def char(self, c: str) -> Parser[str]:
        """Match the single character c and return it.

        Raises:
            GrammarError: If c is not a one-character string
        """
        if not isinstance(c, str) or len(c) != 1:
            raise GrammarError(ErrorTemplate.invalid_character_argument(c))
        return self._primitive(lambda cursor: match_char(cursor, c), f"char({c!r})")

    def literal(self, s: str) -> Parser[str]:
        """Match the string s atomically and return it.

        A failed literal never consumes input, unlike a chain of char().
        """
        if not isinstance(s, str):
            raise GrammarError(ErrorTemplate.invalid_literal_argument(s))
        return self._primitive(lambda cursor: match_literal(cursor, s), f"literal({s!r})")

    def pattern(self, rx: str | re.Pattern[str], ignore_case: bool = False) -> Parser[str]:
        """Match a regular expression anchored at the current offset.

        Args:
            rx: Pattern source or precompiled pattern
            ignore_case: Compile with re.IGNORECASE

        Returns:
            Parser returning the matched text

        Raises:
            GrammarError: If rx does not compile, or is a bytes pattern
        """
        flags = re.IGNORECASE if ignore_case else 0
        try:
            if isinstance(rx, re.Pattern):
                compiled = re.compile(rx.pattern, rx.flags | flags) if flags else rx
            else:
                compiled = re.compile(rx, flags)
        except (re.error, TypeError) as e:
            raise GrammarError(ErrorTemplate.invalid_pattern(str(rx), str(e))) from e
        if not isinstance(compiled.pattern, str):
            raise GrammarError(
                ErrorTemplate.invalid_pattern(str(rx), "bytes patterns cannot match str input")
            )
        return self._primitive(
            lambda cursor: match_pattern(cursor, compiled), f"pattern({compiled.pattern!r})"
        )

    # =========================================================================
    # STRUCTURAL COMBINATORS
    # =========================================================================

    def sequence[T](
        self, parsers: Sequence[ParserLike[T]] | Mapping[Any, ParserLike[T]]
    ) -> Parser[list[T]] | Parser[dict[Any, T]]:
        """Run parsers in order and collect their results.

        A list/tuple yields a list of results; a mapping yields a dict with
        the same keys, in the same order. The first failure propagates and
        the cursor keeps whatever the earlier elements consumed.

        Raises:
            GrammarError: For any other collection shape or non-callable element
        """
        if isinstance(parsers, Mapping):
            keyed = dict(parsers)
            _check_callables("sequence", keyed.values())

            def run_keyed() -> dict[Any, T]:
                return {key: parser() for key, parser in keyed.items()}

            return Parser(run_keyed, f"sequence[{len(keyed)}]")

        ordered = _parser_tuple("sequence", parsers)

        def run() -> list[T]:
            return [parser() for parser in ordered]

        return Parser(run, f"sequence[{len(ordered)}]")

    def many[T](self, parser: ParserLike[T]) -> Parser[list[T]]:
        """Apply parser zero or more times. Never fails.

        Stops at the first failure and restores the cursor to where that
        failed attempt began.

        Raises:
            ZeroWidthRepetitionError: If parser succeeds without consuming input
        """
        _check_callables("many", (parser,))
        state = self._state

        def run() -> list[T]:
            results: list[T] = []
            while True:
                mark = state.mark()
                try:
                    value = parser()
                except ParseFailure:
                    state.restore(mark)
                    return results
                if state.offset <= mark.pos:
                    raise ZeroWidthRepetitionError(
                        ErrorTemplate.zero_width_repetition("many", mark.pos)
                    )
                results.append(value)

        return Parser(run, f"many({_name(parser)})")

    def many1[T](self, parser: ParserLike[T]) -> Parser[list[T]]:
        """Apply parser one or more times; fails iff the first attempt fails."""
        rest = self.many(parser)

        def run() -> list[T]:
            first = parser()
            return [first, *rest()]

        return Parser(run, f"many1({_name(parser)})")

    def choice[T](self, parsers: Sequence[ParserLike[T]]) -> Parser[T]:
        """Leftmost alternation: return the first alternative that succeeds.

        Each failed alternative is rolled back before the next is tried.
        When all fail (or there are none) the cursor is back at the start
        and "ran out of choices" is raised there.
        """
        alternatives = _parser_tuple("choice", parsers)
        state = self._state

        def run() -> T:
            start = state.mark()
            for alternative in alternatives:
                try:
                    return alternative()
                except ParseFailure:
                    state.restore(start)
            raise ParseFailure(ErrorTemplate.choices_exhausted(start.pos), cursor=start)

        return Parser(run, f"choice[{len(alternatives)}]")

    def choice_longest[T](self, parsers: Sequence[ParserLike[T]]) -> Parser[T]:
        """Greedy alternation: return the alternative consuming the most input.

        Every alternative runs from the same start. Lengths are compared
        with strict >, so on a tie the earliest-listed alternative wins.
        Costs the sum of all alternatives, so prefer choice() where the
        grammar has no prefix ambiguity.
        """
        alternatives = _parser_tuple("choice_longest", parsers)
        state = self._state

        def run() -> T:
            start = state.mark()
            best_length = -1
            best_index = -1
            best_value: T | None = None
            best_end = start
            for index, alternative in enumerate(alternatives):
                try:
                    value = alternative()
                except ParseFailure:
                    state.restore(start)
                    continue
                finish = state.mark()
                state.restore(start)
                length = finish.pos - start.pos
                if length > best_length:
                    best_length = length
                    best_index = index
                    best_value = value
                    best_end = finish
            if best_index < 0:
                raise ParseFailure(ErrorTemplate.choices_exhausted(start.pos), cursor=start)
            logger.debug(
                "choice_longest picked alternative %d (%d characters) at offset %d",
                best_index,
                best_length,
                start.pos,
            )
            state.restore(best_end)
            return best_value  # type: ignore[return-value]

        return Parser(run, f"choice_longest[{len(alternatives)}]")

    def sep_by1[T](self, parser: ParserLike[T], separator: ParserLike[object]) -> Parser[list[T]]:
        """One or more parser results separated by separator.

        After a successful separator the next element is mandatory: its
        failure propagates, so a dangling separator is malformed input.
        A failed separator is rolled back and ends the list.
        """
        _check_callables("sep_by1", (parser, separator))

        def run() -> list[T]:
            return self._separated([parser()], parser, separator, "sep_by1")

        return Parser(run, f"sep_by1({_name(parser)}, {_name(separator)})")

    def sep_by[T](self, parser: ParserLike[T], separator: ParserLike[object]) -> Parser[list[T]]:
        """Zero or more parser results separated by separator.

        Only a failure of the very first element is tolerated (returning
        []); afterwards it behaves like sep_by1.
        """
        _check_callables("sep_by", (parser, separator))
        state = self._state

        def run() -> list[T]:
            mark = state.mark()
            try:
                first = parser()
            except ParseFailure:
                state.restore(mark)
                return []
            return self._separated([first], parser, separator, "sep_by")

        return Parser(run, f"sep_by({_name(parser)}, {_name(separator)})")

    def _separated[T](
        self,
        results: list[T],
        parser: ParserLike[T],
        separator: ParserLike[object],
        combinator: str,
    ) -> list[T]:
        state = self._state
        while True:
            mark = state.mark()
            try:
                separator()
            except ParseFailure:
                state.restore(mark)
                return results
            results.append(parser())
            if state.offset <= mark.pos:
                raise ZeroWidthRepetitionError(
                    ErrorTemplate.zero_width_repetition(combinator, mark.pos)
                )

    # =========================================================================
    # RECURSION
    # =========================================================================

    def lazy[T](self, factory: Callable[[], ParserLike[T]], name: str | None = None) -> Parser[T]:
        """Defer building a parser until it is invoked.

        Recursive rules reference themselves through lazy() so building
        the grammar never recurses; factory runs on every invocation.
        """
        _check_callables("lazy", (factory,))
        guard = self._guard

        def run() -> T:
            parser = factory()
            if guard is None:
                return parser()
            with guard:
                return parser()

        return Parser(run, name or _name(factory))

    def forward[T](self, name: str | None = None) -> ForwardParser[T]:
        """Declare a parser now and define() it later."""
        return ForwardParser(name or "forward", self._guard)


def rule[T](
    method: Callable[..., ParserLike[T]],
) -> Callable[..., Parser[T]]:
    """Turn a grammar rule method into a lazily built parser.

    The decorated method returns a Parser at once; the method body runs
    (building the rule) only when that parser is invoked, so rules may
    refer to each other and to themselves freely.

    Example:
        class Nested(ParserEngine):
            @rule
            def item(self) -> Parser[object]:
                return self.choice([self.char("x"), self.group()])

            @rule
            def group(self) -> Parser[list[object]]:
                return self.sequence([self.char("("), self.item(), self.char(")")])
    """

    @functools.wraps(method)
    def wrapper(self: ParserEngine, *args: Any, **kwargs: Any) -> Parser[T]:
        return self.lazy(lambda: method(self, *args, **kwargs), name=method.__name__)

    return wrapper


def _name(parser: object) -> str:
    """Display name of a parser-like callable."""
    if isinstance(parser, Parser):
        return parser.name
    return getattr(parser, "__name__", type(parser).__name__)


def _check_callables(combinator: str, parsers: Iterable[object]) -> None:
    for parser in parsers:
        if not callable(parser):
            raise GrammarError(ErrorTemplate.parser_not_callable(combinator, parser))


def _parser_tuple(combinator: str, parsers: object) -> tuple[ParserLike[Any], ...]:
    """Validate an ordered parser collection and freeze it.

    Raises:
        GrammarError: Unless parsers is a list/tuple-like Sequence of callables
    """
    if isinstance(parsers, (str, bytes)) or not isinstance(parsers, Sequence):
        raise GrammarError(ErrorTemplate.invalid_parser_collection(combinator, parsers))
    _check_callables(combinator, parsers)
    return tuple(parsers)
