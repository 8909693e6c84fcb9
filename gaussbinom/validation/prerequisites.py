"""
Diagonal Prerequisites

Validates that a diagonal's predecessor is complete before it is computed
or resumed. Enforces the order: diagonal 0 -> 1 -> 2 -> ...

PRINCIPLE: "Check before compute, not after failure"

Usage:
    from gaussbinom.validation import require_complete, OrderingError

    try:
        require_complete(flags, 15)
    except OrderingError as e:
        print(f"Cannot advance: {e}")
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple


class GaussBinomError(Exception):
    """Base class for fatal engine conditions."""


class OrderingError(GaussBinomError):
    """Raised when a diagonal is requested before its predecessor is complete."""

    def __init__(
        self,
        diagonal: int,
        missing_keys: List[Tuple[int, int]],
        message: Optional[str] = None,
    ):
        self.diagonal = diagonal
        self.missing_keys = missing_keys

        if message is None:
            shown = missing_keys[:8]
            message = (
                f"Diagonal {diagonal} is not complete. Missing entries:\n"
                + "\n".join(f"  - ({m}, {n})" for m, n in shown)
                + (f"\n  ... and {len(missing_keys) - len(shown)} more" if len(missing_keys) > len(shown) else "")
                + "\n\nResume from diagonal 0 or from a completed checkpoint."
            )

        super().__init__(message)


class CheckpointError(GaussBinomError):
    """Raised when a checkpoint file is absent or cannot be parsed."""

    def __init__(self, path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(
            f"Checkpoint {self.path} unusable: {reason}\n"
            f"Restore the data directory or resume from an earlier checkpoint."
        )


def diagonal_keys(t: int) -> List[Tuple[int, int]]:
    """Keys that make diagonal t complete: (a, t) and (t, a) for 1 <= a <= t."""
    if t == 0:
        return [(0, 0)]
    keys = []
    for a in range(1, t + 1):
        keys.append((a, t))
        if a != t:
            keys.append((t, a))
    return keys


def missing_keys(flags: Iterable[Tuple[int, int]], t: int) -> List[Tuple[int, int]]:
    """Keys of diagonal t absent from the flag index."""
    return [key for key in diagonal_keys(t) if key not in flags]


def check_diagonal(
    flags,
    t: int,
    raise_on_missing: bool = True,
) -> Dict[str, Any]:
    """
    Check that diagonal t is complete in the flag index.

    Args:
        flags: Flag index (anything supporting `key in flags`)
        t: Diagonal index
        raise_on_missing: If True, raise OrderingError on missing entries

    Returns:
        Dict with:
            - diagonal: int
            - complete: bool
            - missing: List of missing keys

    Raises:
        OrderingError: If incomplete and raise_on_missing=True
        ValueError: If t is negative
    """
    if t < 0:
        raise ValueError(f"Diagonal index must be non-negative, got {t}")

    missing = missing_keys(flags, t)
    complete = len(missing) == 0

    if not complete and raise_on_missing:
        raise OrderingError(t, missing)

    return {
        'diagonal': t,
        'complete': complete,
        'missing': missing,
    }


def require_complete(flags, t: int) -> None:
    """Raise OrderingError unless diagonal t is complete."""
    check_diagonal(flags, t, raise_on_missing=True)


def is_complete(flags, t: int) -> bool:
    """True if diagonal t is complete in the flag index."""
    return check_diagonal(flags, t, raise_on_missing=False)['complete']
