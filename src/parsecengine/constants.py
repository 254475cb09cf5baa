"""Shared constants for parsecengine.

Centralized tunables used across the cursor, diagnostics, and engine
modules. Placing them here avoids circular imports and gives a single
place to adjust engine-wide behavior.

Constants are grouped by domain:
- Recursion limits: Opt-in depth protection for recursive grammar rules
- Diagnostics: Error message rendering bounds

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Recursion limits
    "DEFAULT_MAX_DEPTH",
    "RECURSION_RESERVE_FRAMES",
    # Diagnostics
    "ERROR_CONTEXT_LINES",
    "MAX_SNIPPET_LENGTH",
    "FAILURE_PREFIX",
]

# ============================================================================
# RECURSION LIMITS
# ============================================================================
#
# Recursive grammars recurse on the host call stack. The engine imposes no
# limit of its own unless ParserEngine is constructed with max_depth, in which
# case every lazy/forward rule reference is counted by a DepthGuard.
#
# ============================================================================

# Default grammar nesting limit. None means bounded only by the interpreter.
DEFAULT_MAX_DEPTH: int | None = None

# Stack frames kept free below sys.getrecursionlimit() when clamping a
# requested max_depth. Each rule reference costs several Python frames.
RECURSION_RESERVE_FRAMES: int = 50

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Source lines shown above and below the failing line in format_with_context().
ERROR_CONTEXT_LINES: int = 2

# Found-text snippets in literal mismatch messages are cut to this length.
MAX_SNIPPET_LENGTH: int = 40

# Leading text of every rendered ParseFailure.
FAILURE_PREFIX: str = "parse error"
