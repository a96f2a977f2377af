"""Pool state passed in by the orchestrator, call context and validation results."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PoolState:
    """Reserves and liquidity of a pool, passed by value into every validation.

    Attributes:
        reserves: Reserve per token, index-aligned with the weights
        total_liquidity: Total liquidity claims on the reserves
    """

    reserves: tuple[int, ...]
    total_liquidity: int

    @property
    def reserve_x(self) -> int:
        return self.reserves[0]

    @property
    def reserve_y(self) -> int:
        return self.reserves[1]


@dataclass(frozen=True)
class CallContext:
    """Capability passed into every mutating call.

    Attributes:
        caller: Immediate caller; must be the orchestrator the strategy trusts
        sender: Account that originated the operation; compared against the
            pool controller for updates
    """

    caller: str
    sender: str


@dataclass(frozen=True)
class InitResult:
    valid: bool
    invariant: int
    reserves: tuple[int, ...]
    liquidity: int


@dataclass(frozen=True)
class AllocationResult:
    """Outcome of an allocate or deallocate validation.

    ``deltas`` are unsigned reserve changes; the caller applies them in the
    direction of the operation.
    """

    valid: bool
    invariant: int
    deltas: tuple[int, ...]
    delta_liquidity: int


@dataclass(frozen=True)
class SwapResult:
    """Outcome of a swap validation.

    Attributes:
        valid: True if the post-swap invariant is inside the epsilon band
        invariant: Post-swap invariant
        deltas: (amount_in, amount_out)
        delta_liquidity: Liquidity minted by the swap fee
        direction: Swap direction as given by the caller
    """

    valid: bool
    invariant: int
    deltas: tuple[int, int]
    delta_liquidity: int
    direction: bool | tuple[int, int]
