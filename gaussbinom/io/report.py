"""
Report — all {n}.dat writes go through here.

One line per coefficient index l of vector(n, n):

    n n l ln(coef[l]) ln(coef[l]) - ln(sum(coef))

Logs are taken on exact Python ints (math.log accepts arbitrary size), and
the normalizer is the log of the exact integer sum, so nothing overflows
float64 before the final log.
"""

import math
from pathlib import Path
from typing import Sequence, Tuple

import numpy as np


def log_density(coefficients: Sequence[int]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Log coefficients and log density.

    Returns:
        (ln_x, ln_x - ln(sum)) as float64 arrays
    """
    ln_x = np.array([math.log(x) if x > 0 else -np.inf for x in coefficients], dtype=np.float64)
    ln_sum = math.log(sum(coefficients))
    return ln_x, ln_x - ln_sum


def report_path(data_path, n: int) -> Path:
    return Path(data_path) / f"{n}.dat"


def write_report(data_path, n: int, coefficients: Sequence[int], verbose: bool = False) -> Path:
    """
    Write the log-density report of vector(n, n).

    Args:
        data_path: Data directory
        n: Diagonal index (written in the first two columns)
        coefficients: vector(n, n)
        verbose: Print path on write

    Returns:
        Path to written file
    """
    ln_x, density = log_density(coefficients)
    l = np.arange(len(ln_x))
    nn = np.full(len(ln_x), n)

    path = report_path(data_path, n)
    path.parent.mkdir(parents=True, exist_ok=True)

    table = np.column_stack([nn, nn, l, ln_x, density])
    np.savetxt(str(path), table, fmt=['%d', '%d', '%d', '%.17g', '%.17g'], delimiter=' ')

    if verbose:
        print(f"  -> {path} ({len(ln_x)} rows)")

    return path
