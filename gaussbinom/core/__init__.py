"""
Core Engines
============

Compute layer. No file I/O except through gaussbinom.io.checkpoint.

Structure:
    recurrence.py  - vector(m, n) from vector(m-1, n) and vector(m, n-1)
    frontier.py    - FlagIndex, FrontierCache, one-diagonal step
    engine.py      - GaussianBinomial: resume, advance, checkpoint
"""

from gaussbinom.core.recurrence import coefficients, ones
from gaussbinom.core.frontier import FlagIndex, FrontierCache, advance_diagonal
from gaussbinom.core.engine import GaussianBinomial

__all__ = [
    'coefficients',
    'ones',
    'FlagIndex',
    'FrontierCache',
    'advance_diagonal',
    'GaussianBinomial',
]
