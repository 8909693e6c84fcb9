"""
Recurrence Engine.

Coefficient vector of the Gaussian binomial [m+n choose m]_q from its two
predecessors (q-Pascal identity with a degree shift of n):

    vector(m, n)[l] = vector(m-1, n)[l-n] + vector(m, n-1)[l]

Out-of-range terms are zero. Pure function: lookups only, no mutation.
"""

from typing import Dict, List, Tuple

Key = Tuple[int, int]
CoefficientVector = List[int]


def ones(m: int, n: int) -> CoefficientVector:
    """All-ones vector of length m*n + 1 (boundary rows m == 1 or n == 1)."""
    return [1] * (m * n + 1)


def coefficients(m: int, n: int, frontier: Dict[Key, CoefficientVector]) -> CoefficientVector:
    """
    Compute vector(m, n) from the cached vectors of (m-1, n) and (m, n-1).

    Args:
        m: Row index, >= 1
        n: Column index, >= 1
        frontier: Mapping holding (m-1, n) and (m, n-1) unless m or n is 1

    Returns:
        List of m*n + 1 ints, coefficient of q^l at index l

    Raises:
        KeyError: If a required predecessor is not in the frontier
    """
    if m == 1 or n == 1:
        return ones(m, n)

    lower = frontier[(m - 1, n)]   # valid on [0, (m-1)*n]
    left = frontier[(m, n - 1)]    # valid on [0, m*(n-1)]

    top = m * n
    split = top - m

    res = left[:n]
    res.extend(lower[l - n] + left[l] for l in range(n, split + 1))
    res.extend(lower[l - n] for l in range(split + 1, top + 1))
    return res
