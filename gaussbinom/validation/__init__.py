"""
Validation Module

Validates diagonal ordering before the engine computes or resumes.

Exports:
    - check_diagonal: Report whether a diagonal is complete
    - require_complete: Raise unless a diagonal is complete
    - is_complete: Boolean form of check_diagonal
    - GaussBinomError: Base class of the fatal conditions
    - OrderingError: Raised when a predecessor diagonal is incomplete
    - CheckpointError: Raised when a checkpoint file is absent or malformed
"""

from .prerequisites import (
    check_diagonal,
    require_complete,
    is_complete,
    diagonal_keys,
    missing_keys,
    GaussBinomError,
    OrderingError,
    CheckpointError,
)

__all__ = [
    'check_diagonal',
    'require_complete',
    'is_complete',
    'diagonal_keys',
    'missing_keys',
    'GaussBinomError',
    'OrderingError',
    'CheckpointError',
]
