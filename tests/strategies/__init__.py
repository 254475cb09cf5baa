"""Hypothesis strategies for parsecengine property-based testing.

Usage:
    from tests.strategies import repeated_prefix, separated_digits

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - repeated_prefix, separated_digits, prefix_ambiguous_words
"""

from .grammar import (
    SMALL_ALPHABET,
    parse_inputs,
    prefix_ambiguous_words,
    repeated_prefix,
    separated_digits,
    single_chars,
)

__all__ = [
    "SMALL_ALPHABET",
    "parse_inputs",
    "prefix_ambiguous_words",
    "repeated_prefix",
    "separated_digits",
    "single_chars",
]
