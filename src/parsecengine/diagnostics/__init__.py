"""Diagnostic system for parsecengine errors.

Provides structured error diagnostics with codes, offsets, hints and
interchangeable output formats.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    DepthLimitExceededError,
    GrammarError,
    ParseFailure,
    ParsecError,
    ZeroWidthRepetitionError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "GrammarError",
    "OutputFormat",
    "ParseFailure",
    "ParsecError",
    "ZeroWidthRepetitionError",
]
