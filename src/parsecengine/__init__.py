"""parsecengine - backtracking parser combinators over a shared cursor.

Build recursive-descent parsers for arbitrary grammars by composing
primitives (char, literal, pattern, end) with structural combinators
(sequence, many, many1, choice, choice_longest, sep_by, sep_by1).

Public API:
    ParserEngine - Owns the cursor and builds every parser
    rule - Decorator for lazily built grammar rule methods
    Parser - Named zero-argument parser with map()
    ForwardParser - Placeholder parser bound later with define()

Exceptions:
    ParsecError - Base exception class
    ParseFailure - Input did not match (the only error combinators catch)
    GrammarError - Malformed grammar construction or misuse
    ZeroWidthRepetitionError - Repetition that would never terminate
    DepthLimitExceededError - Opt-in rule nesting limit exceeded

Submodules:
    parsecengine.cursor - Cursor, ParseResult and ParserState
    parsecengine.primitives - Pure cursor-level matchers
    parsecengine.diagnostics - Diagnostic codes, templates and formatting
"""

from .cursor import Cursor, ParseResult, ParserState
from .diagnostics import (
    DepthLimitExceededError,
    GrammarError,
    ParseFailure,
    ParsecError,
    ZeroWidthRepetitionError,
)
from .engine import ParserEngine, rule
from .parser import ForwardParser, Parser

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("parsecengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Cursor",
    "DepthLimitExceededError",
    "ForwardParser",
    "GrammarError",
    "ParseFailure",
    "ParseResult",
    "ParsecError",
    "Parser",
    "ParserEngine",
    "ParserState",
    "ZeroWidthRepetitionError",
    "__version__",
    "rule",
]
