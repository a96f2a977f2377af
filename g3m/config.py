"""Engine configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from g3m.constants import (
    BISECTION_MAX_ITERATIONS,
    BISECTION_TOLERANCE,
    BRACKET_STEP_BPS,
    EPSILON,
    MAX_BRACKET_STEPS,
)


@dataclass(frozen=True)
class EngineConfig:
    """Centralized configuration for invariant validation and root-finding.

    Attributes:
        epsilon: Half-width of the band (-epsilon, epsilon) inside which an
            invariant counts as satisfied (default: 30 wei)
        bisection_tolerance: Bracket width at which bisection stops (default: 1)
        max_iterations: Hard cap on bisection rounds (default: 256)
        bracket_step_bps: Multiplicative step used to expand the liquidity
            bracket, in basis points (default: 10 = 0.1%)
        max_bracket_steps: Hard cap on bracket expansion steps (default: 20,000)
    """

    epsilon: int = EPSILON
    bisection_tolerance: int = BISECTION_TOLERANCE
    max_iterations: int = BISECTION_MAX_ITERATIONS
    bracket_step_bps: int = BRACKET_STEP_BPS
    max_bracket_steps: int = MAX_BRACKET_STEPS

    def __post_init__(self) -> None:
        if self.epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")
        if not 0 < self.bracket_step_bps < 10_000:
            raise ValueError(
                f"bracket_step_bps must be in range (0, 10000), got {self.bracket_step_bps}"
            )

    def is_within_epsilon(self, invariant: int) -> bool:
        """True if the invariant lies inside the symmetric band."""
        return -self.epsilon < invariant < self.epsilon

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineConfig:
        """Build a config from environment variables with sensible defaults.

        - G3M_EPSILON: invariant tolerance in wei
        - G3M_MAX_ITERATIONS: bisection iteration cap
        - G3M_MAX_BRACKET_STEPS: bracket expansion cap
        """
        env = os.environ if environ is None else environ
        return cls(
            epsilon=int(env.get("G3M_EPSILON", str(EPSILON))),
            max_iterations=int(env.get("G3M_MAX_ITERATIONS", str(BISECTION_MAX_ITERATIONS))),
            max_bracket_steps=int(env.get("G3M_MAX_BRACKET_STEPS", str(MAX_BRACKET_STEPS))),
        )


# Default configuration instance
DEFAULT_ENGINE_CONFIG = EngineConfig()
