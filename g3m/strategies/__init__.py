"""Strategies: per-pool parameter storage and transition validation.

- g3m: two-token pools, direction given as ``swap_x_in``
- ntoken_g3m: N-token pools, direction given as ``(index_in, index_out)``
"""

from .base import BaseStrategy, validate_swap_fee
from .g3m import G3MPoolRecord, G3MStrategy
from .ntoken_g3m import NTokenG3MStrategy, NTokenPoolRecord

__all__ = [
    "BaseStrategy",
    "validate_swap_fee",
    "G3MPoolRecord",
    "G3MStrategy",
    "NTokenG3MStrategy",
    "NTokenPoolRecord",
]
