"""Parser values.

A parser is any zero-argument callable: invoking it runs one grammar rule
against the engine's shared ParserState, returning a value or raising
ParseFailure. Combinators accept plain callables such as grammar-author
closures; Parser adds a name for repr/debug output and map().
"""

import logging
from collections.abc import Callable

from parsecengine.depth_guard import DepthGuard
from parsecengine.diagnostics import ErrorTemplate, GrammarError

__all__ = ["ForwardParser", "Parser"]

logger = logging.getLogger(__name__)


class Parser[T]:
    """Named zero-argument parser.

    Example:
        >>> from parsecengine import ParserEngine
        >>> engine = ParserEngine("42")
        >>> number = engine.pattern(r"\\d+").map(int)
        >>> number()
        42
    """

    __slots__ = ("_run", "name")

    def __init__(self, run: Callable[[], T], name: str = "parser") -> None:
        self._run = run
        self.name = name

    def __call__(self) -> T:
        return self._run()

    def map[U](self, fn: Callable[[T], U]) -> "Parser[U]":
        """Return a parser that applies fn to this parser's result."""
        run = self._run

        def mapped() -> U:
            return fn(run())

        fn_name = getattr(fn, "__name__", type(fn).__name__)
        return Parser(mapped, f"{self.name}.map({fn_name})")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class ForwardParser[T](Parser[T]):
    """Placeholder for a rule that is defined after it is referenced.

    Lets mutually recursive rules be wired up without construction-time
    recursion:

        expr = engine.forward("expr")
        parens = engine.sequence([engine.char("("), expr, engine.char(")")])
        expr.define(engine.choice([number, parens]))
    """

    __slots__ = ("_guard", "_target")

    def __init__(self, name: str = "forward", guard: DepthGuard | None = None) -> None:
        super().__init__(self._invoke, name)
        self._target: Callable[[], T] | None = None
        self._guard = guard

    @property
    def is_defined(self) -> bool:
        """True once define() has bound a target."""
        return self._target is not None

    def define(self, parser: Callable[[], T]) -> "ForwardParser[T]":
        """Bind the rule this placeholder stands for.

        Raises:
            GrammarError: If already defined, or parser is not callable
        """
        if self._target is not None:
            raise GrammarError(ErrorTemplate.forward_already_defined(self.name))
        if not callable(parser):
            raise GrammarError(ErrorTemplate.parser_not_callable("forward", parser))
        self._target = parser
        logger.debug("Forward parser %r defined as %r", self.name, parser)
        return self

    def _invoke(self) -> T:
        target = self._target
        if target is None:
            raise GrammarError(ErrorTemplate.forward_not_defined(self.name))
        if self._guard is None:
            return target()
        with self._guard:
            return target()
