"""Geometric mean curve families.

This package provides the trading function evaluators and the liquidity
correction solver:
- g3m: two-token weighted geometric mean
- ntoken: N-token weighted geometric mean
- liquidity: bracket expansion + bisection to the liquidity root
"""

from .base import Curve, InitialPoolData, LiquidityContext
from .g3m import G3M_CURVE, G3MCurve, G3MCurveParams
from .liquidity import correct_liquidity, find_liquidity_bracket
from .ntoken import NTOKEN_G3M_CURVE, NTokenCurveParams, NTokenG3MCurve

__all__ = [
    "Curve",
    "InitialPoolData",
    "LiquidityContext",
    "G3MCurve",
    "G3MCurveParams",
    "G3M_CURVE",
    "NTokenG3MCurve",
    "NTokenCurveParams",
    "NTOKEN_G3M_CURVE",
    "correct_liquidity",
    "find_liquidity_bracket",
]
