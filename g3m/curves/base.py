"""Shared curve abstractions.

Each curve family implements ``trading_function``; the inherited ``evaluate``
turns it into the ``Evaluable`` capability the bisection solver consumes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from g3m.config import EngineConfig

P = TypeVar("P")


@dataclass(frozen=True)
class LiquidityContext(Generic[P]):
    """Evaluation context passed unmodified through the root-finder.

    Attributes:
        reserves: Reserve vector the liquidity is solved for
        target_invariant: Invariant value the solver drives toward
        params: Actualized curve parameters
    """

    reserves: tuple[int, ...]
    target_invariant: int
    params: P


@dataclass(frozen=True)
class InitialPoolData:
    """Reserves and solved liquidity for a new pool."""

    reserves: tuple[int, ...]
    liquidity: int
    invariant: int


class Curve(ABC, Generic[P]):
    """A trading-function family, monotonically decreasing in liquidity."""

    @abstractmethod
    def trading_function(self, reserves: Sequence[int], liquidity: int, params: P) -> int:
        """Invariant value of ``reserves`` at ``liquidity`` (signed WAD)."""

    @abstractmethod
    def compute_l(self, reserves: Sequence[int], params: P) -> int:
        """Closed-form liquidity approximation for ``reserves``."""

    def evaluate(self, context: LiquidityContext[P], x: int) -> int:
        """Evaluator used by the bisection solver, with x as the liquidity."""
        return self.trading_function(context.reserves, x, context.params) - context.target_invariant

    def solve_liquidity(
        self,
        reserves: Sequence[int],
        params: P,
        config: EngineConfig | None = None,
    ) -> int:
        """Liquidity that zeroes the trading function for ``reserves``."""
        from g3m.curves.liquidity import correct_liquidity

        approximated_l = self.compute_l(reserves, params)
        invariant = self.trading_function(reserves, approximated_l, params)
        return correct_liquidity(self, reserves, invariant, approximated_l, params, config)
