"""G3M engine error classes.

Every error raised by a validation or arithmetic operation derives from
G3MError. Validation errors abort the whole operation; no pool record is
mutated on any of these paths.
"""

from __future__ import annotations


class G3MError(Exception):
    """Base error for G3M engine operations."""

    pass


class DomainError(G3MError):
    """Illegal arithmetic input (division by zero, bad power base, bad bracket)."""

    pass


class ArithmeticOverflow(G3MError, ArithmeticError):
    """Result or intermediate exceeds the fixed-point word size."""

    pass


class InvalidWeights(G3MError):
    """Weight vector does not sum to exactly 1 WAD."""

    def __init__(self, observed_sum: int) -> None:
        self.observed_sum = observed_sum
        super().__init__(f"Weights must sum to 1e18, got {observed_sum}")


class InvalidConfiguration(G3MError):
    """Reserve and weight vectors have different lengths."""

    def __init__(self, reserves_length: int, weights_length: int) -> None:
        self.reserves_length = reserves_length
        self.weights_length = weights_length
        super().__init__(
            f"Length mismatch: {reserves_length} reserves vs {weights_length} weights"
        )


class InvalidSwapFee(G3MError):
    """Swap fee must be in range [0, 1 WAD)."""

    def __init__(self, fee: int) -> None:
        self.fee = fee
        super().__init__(f"Swap fee must be in range [0, 1e18), got {fee}")


class InvalidParamsEncoding(G3MError):
    """Parameter or update blob could not be decoded."""

    pass


class DeltaExceedsMaximum(G3MError):
    """Computed allocation delta is larger than the caller's stated maximum."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Delta {actual} exceeds maximum {expected}")


class DeltaBelowMinimum(G3MError):
    """Computed deallocation delta is smaller than the caller's stated minimum."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Delta {actual} below minimum {expected}")


class NotEnoughLiquidity(G3MError):
    """Swap output exceeds the reserve available on the output side."""

    pass


class UnauthorizedCaller(G3MError):
    """Caller is not the orchestrator, or sender is not the pool controller."""

    pass


class InvalidUpdateCode(G3MError):
    """Update payload carries an unrecognized tag."""

    pass


class PoolNotFound(G3MError):
    """No pool record exists for the given pool id."""

    pass


class PoolAlreadyInitialized(G3MError):
    """A pool record already exists for the given pool id."""

    pass
