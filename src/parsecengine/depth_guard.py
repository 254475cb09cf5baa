"""Opt-in depth limiting for recursive grammar rules.

Recursive grammars recurse on the Python call stack. ParserEngine only
counts nesting when constructed with max_depth; each lazy or forward
rule reference then enters the engine's DepthGuard, turning runaway
recursion into a DepthLimitExceededError instead of a RecursionError.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from parsecengine.constants import RECURSION_RESERVE_FRAMES
from parsecengine.diagnostics import DepthLimitExceededError, ErrorTemplate

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthGuard:
    """Counts how many guarded rule invocations are active.

    One guard is shared by every lazy and forward parser of an engine:

        with engine_guard:
            value = rule_body()

    Attributes:
        max_depth: Nesting limit, after depth_clamp()
        current_depth: Rule invocations currently on the stack
    """

    max_depth: int
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Keep max_depth below the interpreter recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Count one more active rule.

        Raises:
            DepthLimitExceededError: If max_depth rules are already active.
                The count is left unchanged, since __exit__ will not run.
        """
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(ErrorTemplate.depth_exceeded(self.max_depth))
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Count the rule as finished, whether it returned or raised."""
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Active rule invocations."""
        return self.current_depth

    def reset(self) -> None:
        """Forget any count left over from an earlier parse."""
        self.current_depth = 0


def depth_clamp(requested: int, reserve_frames: int = RECURSION_RESERVE_FRAMES) -> int:
    """Lower requested to fit under sys.getrecursionlimit() - reserve_frames.

    A nesting limit above the interpreter limit could never trigger, so it
    is replaced by the largest usable value and a warning is logged.

    Example:
        >>> depth_clamp(100)
        100
        >>> ceiling = sys.getrecursionlimit() - RECURSION_RESERVE_FRAMES
        >>> depth_clamp(sys.getrecursionlimit()) == ceiling
        True
    """
    ceiling = sys.getrecursionlimit() - reserve_frames
    if requested <= ceiling:
        return requested
    logger.warning(
        "Clamping max_depth %d to %d (recursion limit %d, %d frames reserved)",
        requested,
        ceiling,
        sys.getrecursionlimit(),
        reserve_frames,
    )
    return ceiling
