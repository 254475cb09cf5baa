"""Rendering of Diagnostic records for people and tools.

ParseFailure uses the SIMPLE form for str(). RUST and JSON are for
callers that surface parse errors in terminals or editors.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from parsecengine.constants import FAILURE_PREFIX

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

_GRAMMAR_PREFIX = "grammar error"


class OutputFormat(StrEnum):
    """Shape of DiagnosticFormatter output."""

    SIMPLE = "simple"  # parse error: ... at position N
    RUST = "rust"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Turns diagnostics into text.

    Attributes:
        output_format: SIMPLE, RUST or JSON
        sanitize: Cut message, expected and hint text to max_content_length
        color: Highlight the RUST severity label with ANSI codes
        max_content_length: Cut-off used when sanitize is set

    Example:
        >>> from parsecengine.diagnostics import ErrorTemplate
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.not_at_end(3)
        >>> print(formatter.format(diagnostic))
        parse error: not at end of string at position 3

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.RUST)
        >>> print(formatter.format(diagnostic))
        error[NOT_AT_END]: not at end of string
          --> position 3
          = help: Trailing input remains after the grammar finished
    """

    output_format: OutputFormat = OutputFormat.SIMPLE
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic in the configured output_format."""
        match self.output_format:
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics, one blank line between each."""
        return "\n\n".join(self.format(diagnostic) for diagnostic in diagnostics)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """One line, without an offset for grammar errors:

            parse error: ran out of choices at position 4
        """
        prefix = FAILURE_PREFIX if diagnostic.is_parse_failure else _GRAMMAR_PREFIX
        message = self._maybe_sanitize(diagnostic.message)
        if diagnostic.offset is None:
            return f"{prefix}: {message}"
        return f"{prefix}: {message} at position {diagnostic.offset}"

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Multi-line, modelled on rustc:

            error[UNEXPECTED_CHARACTER]: got character b instead of a
              --> position 0
              = expected: 'a'
              = help: Check the input at the reported position
        """
        severity = "\033[1;31merror\033[0m" if self.color else "error"

        parts = [f"{severity}[{diagnostic.code.name}]: {self._maybe_sanitize(diagnostic.message)}"]

        if diagnostic.offset is not None:
            parts.append(f"  --> position {diagnostic.offset}")

        if diagnostic.expected:
            expected_str = ", ".join(repr(e) for e in diagnostic.expected)
            parts.append(f"  = expected: {self._maybe_sanitize(expected_str)}")

        if diagnostic.hint:
            parts.append(f"  = help: {self._maybe_sanitize(diagnostic.hint)}")

        return "\n".join(parts)

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """A single JSON object; expected and hint only when present:

            {"code": "NOT_AT_END", "code_value": 3003, "message": "...", "offset": 3}
        """
        data: dict[str, str | int | list[str] | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._maybe_sanitize(diagnostic.message),
            "offset": diagnostic.offset,
        }

        if diagnostic.expected:
            data["expected"] = list(diagnostic.expected)

        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        return json.dumps(data, ensure_ascii=False)

    def _maybe_sanitize(self, text: str) -> str:
        limit = self.max_content_length
        if not self.sanitize or len(text) <= limit:
            return text
        return f"{text[:limit]}..."
