"""Numerical primitives for the G3M engine.

This package provides:
- fixed_point: WAD (18-decimal) arithmetic with explicit rounding, ln/exp/pow
- bisection: curve-agnostic bisection root-finder
- deltas: rounding-aware allocation, deallocation and swap-fee deltas
"""

from g3m.math.bisection import BisectionResult, Evaluable, bisect
from g3m.math.fixed_point import (
    WAD,
    div_down,
    div_up,
    exp_wad,
    ln_wad,
    mul_div_down,
    mul_div_up,
    mul_down,
    mul_up,
    pow_wad,
)

__all__ = [
    "WAD",
    "mul_down",
    "mul_up",
    "div_down",
    "div_up",
    "mul_div_down",
    "mul_div_up",
    "ln_wad",
    "exp_wad",
    "pow_wad",
    "BisectionResult",
    "Evaluable",
    "bisect",
]
