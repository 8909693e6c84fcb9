"""
Gaussian Binomial Engine.

Owns one data directory: the flag index (loaded once, at construction) and a
frontier cache (rebuilt or reloaded inside every compute call).

    gb = GaussianBinomial('data')
    r = gb.compute(0, 16)      # seeds (0, 0), advances to diagonal 16
    r = gb.compute(16, 32)     # resumes from GB_16.bin

Each compute call writes GB_{to}.bin and overwrites cache_table.bin.
Re-running from the last valid checkpoint reproduces identical results.
"""

import logging
from pathlib import Path
from typing import List, Optional

from gaussbinom.core.frontier import FlagIndex, FrontierCache, advance_diagonal
from gaussbinom.io.checkpoint import (
    flags_path,
    frontier_path,
    load_flags,
    load_frontier,
    save_flags,
    save_frontier,
    latest_checkpoint,
)
from gaussbinom.validation.prerequisites import (
    CheckpointError,
    diagonal_keys,
    is_complete,
    require_complete,
)

logger = logging.getLogger(__name__)


class GaussianBinomial:
    """Diagonal-by-diagonal q-binomial table with on-disk checkpoints."""

    def __init__(self, data_path):
        self.data_path = Path(data_path)
        self.frontier = FrontierCache()

        if flags_path(self.data_path).exists():
            self.flags = load_flags(self.data_path)
            logger.debug("loaded %d flags from %s", len(self.flags), self.data_path)
        else:
            self.data_path.mkdir(parents=True, exist_ok=True)
            self.flags = FlagIndex()

    def is_cached(self, m: int, n: int) -> bool:
        return self.flags.is_cached(m, n)

    def is_complete(self, t: int) -> bool:
        return is_complete(self.flags, t)

    def latest_complete_diagonal(self, step: int = 1) -> Optional[int]:
        """Highest diagonal on the step grid that is complete and has a snapshot."""
        return latest_checkpoint(self.data_path, self.flags, step=step)

    def _check_snapshot(self, t: int) -> None:
        """Raise CheckpointError unless the loaded frontier holds all of diagonal t."""
        path = frontier_path(self.data_path, t)
        missing = [k for k in diagonal_keys(t) if k not in self.frontier]
        if missing:
            raise CheckpointError(path, f"snapshot lacks {len(missing)} entries of diagonal {t}")
        for m, n in diagonal_keys(t):
            if len(self.frontier[(m, n)]) != m * n + 1:
                raise CheckpointError(
                    path,
                    f"vector ({m}, {n}) has {len(self.frontier[(m, n)])} coefficients, expected {m * n + 1}",
                )

    def compute(self, start: int, to: int) -> List[int]:
        """
        Advance from diagonal `start` to diagonal `to` and return vector(to, to).

        Args:
            start: Diagonal to begin from. 0 seeds the base case; any other
                value resumes from the GB_{start}.bin snapshot.
            to: Last diagonal to compute (inclusive), >= start

        Returns:
            Coefficient vector of (to, to), length to*to + 1

        Raises:
            ValueError: If start < 0 or to < start
            OrderingError: If diagonal `start` (start > 0) is not complete
            CheckpointError: If the GB_{start}.bin snapshot is absent or malformed
        """
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")
        if to < start:
            raise ValueError(f"to ({to}) must be >= start ({start})")

        if start == 0:
            self.frontier = FrontierCache()
            advance_diagonal(0, self.frontier, self.flags)
        else:
            require_complete(self.flags, start)
            self.frontier = load_frontier(self.data_path, start)
            self._check_snapshot(start)
            logger.debug("resumed diagonal %d (%d vectors)", start, len(self.frontier))

        for t in range(start + 1, to + 1):
            advance_diagonal(t, self.frontier, self.flags)

        result = list(self.frontier[(to, to)])

        save_frontier(self.data_path, to, self.frontier)
        save_flags(self.data_path, self.flags)

        return result
