"""
Gaussbinom — Gaussian binomial coefficient table, diagonal by diagonal.

Public API:
    from gaussbinom import GaussianBinomial, run
    gb = GaussianBinomial('data')
    coef = gb.compute(0, 16)           # vector(16, 16)
    run('data', end=512, step=16)      # full schedule with reports

Layers:
    gaussbinom.core        Engines — recurrence, diagonal step, GaussianBinomial
    gaussbinom.io          Checkpoints (.bin), reports (.dat), manifest.yaml
    gaussbinom.validation  Ordering checks and fatal error types
"""

from gaussbinom.core.engine import GaussianBinomial
from gaussbinom.run import run
from gaussbinom.validation import GaussBinomError, OrderingError, CheckpointError

__all__ = ["GaussianBinomial", "run", "GaussBinomError", "OrderingError", "CheckpointError"]
