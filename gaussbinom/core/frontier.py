"""
Frontier Engine (diagonal step).

Advances the table by one diagonal: every (m, n) with max(m, n) == t.

Two stores are mutated in place:
    FlagIndex       permanent record of computed keys (never shrinks)
    FrontierCache   vectors needed for the next diagonal only

After diagonal t the superseded entries (m, t-1), (t-1, m) for
1 <= m <= t-1 are gone, so the frontier holds the 2t-1 vectors of diagonal t
(plus the (0, 0) seed), never the whole triangle.
"""

import logging

from gaussbinom.core.recurrence import coefficients
from gaussbinom.validation.prerequisites import require_complete

logger = logging.getLogger(__name__)


class FlagIndex(dict):
    """Key -> True for every entry ever computed."""

    def mark(self, m: int, n: int) -> None:
        self[(m, n)] = True

    def is_cached(self, m: int, n: int) -> bool:
        return (m, n) in self


class FrontierCache(dict):
    """Key -> coefficient vector, restricted to the current diagonal."""

    def evict(self, m: int, n: int) -> None:
        self.pop((m, n), None)


def advance_diagonal(t: int, frontier: FrontierCache, flags: FlagIndex) -> None:
    """
    Compute diagonal t from a frontier holding diagonal t-1.

    Args:
        t: Diagonal index, >= 0
        frontier: Frontier cache, mutated in place
        flags: Flag index, mutated in place

    Raises:
        OrderingError: If t > 0 and diagonal t-1 is not complete
    """
    if t == 0:
        frontier[(0, 0)] = [1]
        flags.mark(0, 0)
        return

    require_complete(flags, t - 1)

    for m in range(1, t):
        frontier[(m, t)] = coefficients(m, t, frontier)
        frontier[(t, m)] = coefficients(t, m, frontier)
        flags.mark(m, t)
        flags.mark(t, m)

        # (m, t-1) was the last consumer's input: (m, t) and (m+1, t-1) are done
        frontier.evict(m, t - 1)
        frontier.evict(t - 1, m)

    frontier[(t, t)] = coefficients(t, t, frontier)
    flags.mark(t, t)

    logger.debug("diagonal %d: %d cached vectors, %d flags", t, len(frontier), len(flags))
