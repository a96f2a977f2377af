"""Rounding-aware delta arithmetic for allocation, deallocation and swap fees.

Rounding always favours the pool:
- depositors are charged at least their proportional share (round up)
- withdrawers receive at most their proportional share (round down)
- swap fees never under-mint liquidity (round up)
"""

from __future__ import annotations

from collections.abc import Sequence

from g3m.errors import DomainError

from .fixed_point import div_up, mul_div_down, mul_div_up, mul_up


def compute_allocation_deltas(
    reserves: Sequence[int], delta_liquidity: int, total_liquidity: int
) -> tuple[int, ...]:
    """Reserve deltas a depositor pays to mint ``delta_liquidity``.

    delta_i = reserve_i * delta_liquidity / total_liquidity, rounded up.

    Raises:
        DomainError: If total_liquidity is zero
    """
    if total_liquidity <= 0:
        raise DomainError("Cannot allocate into a pool with zero liquidity")
    return tuple(mul_div_up(r, delta_liquidity, total_liquidity) for r in reserves)


def compute_deallocation_deltas(
    reserves: Sequence[int], delta_liquidity: int, total_liquidity: int
) -> tuple[int, ...]:
    """Reserve deltas a withdrawer receives for burning ``delta_liquidity``.

    delta_i = reserve_i * delta_liquidity / total_liquidity, rounded down.

    Raises:
        DomainError: If total_liquidity is zero or delta_liquidity exceeds it
    """
    if total_liquidity <= 0:
        raise DomainError("Cannot deallocate from a pool with zero liquidity")
    if delta_liquidity > total_liquidity:
        raise DomainError(
            f"Cannot burn {delta_liquidity} liquidity out of {total_liquidity}"
        )
    return tuple(mul_div_down(r, delta_liquidity, total_liquidity) for r in reserves)


def compute_delta_l_given_delta_in(
    weight_in: int,
    swap_fee: int,
    total_liquidity: int,
    amount_in: int,
    reserve_in: int,
) -> int:
    """Liquidity minted by the fee portion of a swap input.

    deltaL = weight_in * swap_fee * L * (amount_in / reserve_in), rounded up.
    """
    fee_share = mul_up(weight_in, swap_fee)
    liquidity_share = mul_up(fee_share, total_liquidity)
    return mul_up(liquidity_share, div_up(amount_in, reserve_in))


# =============================================================================
# Single-token allocation (two-token pools)
# =============================================================================


def _paired_allocation(
    add: bool,
    amount: int,
    reserve: int,
    paired_reserve: int,
    total_liquidity: int,
) -> tuple[int, int]:
    if reserve <= 0:
        raise DomainError("Reserve of the specified token must be positive")
    if add:
        paired = mul_div_up(amount, paired_reserve, reserve)
        delta_l = mul_div_down(amount, total_liquidity, reserve)
    else:
        if amount > reserve:
            raise DomainError(f"Cannot withdraw {amount} from reserve {reserve}")
        paired = mul_div_down(amount, paired_reserve, reserve)
        delta_l = mul_div_up(amount, total_liquidity, reserve)
    return paired, delta_l


def compute_allocation_given_x(
    delta_x: int, reserve_x: int, reserve_y: int, total_liquidity: int
) -> tuple[int, int]:
    """Derive (delta_y, delta_liquidity) for a deposit of ``delta_x``.

    delta_y is charged rounded up; delta_liquidity is minted rounded down.
    """
    return _paired_allocation(True, delta_x, reserve_x, reserve_y, total_liquidity)


def compute_allocation_given_y(
    delta_y: int, reserve_x: int, reserve_y: int, total_liquidity: int
) -> tuple[int, int]:
    """Derive (delta_x, delta_liquidity) for a deposit of ``delta_y``."""
    return _paired_allocation(True, delta_y, reserve_y, reserve_x, total_liquidity)


def compute_deallocation_given_x(
    delta_x: int, reserve_x: int, reserve_y: int, total_liquidity: int
) -> tuple[int, int]:
    """Derive (delta_y, delta_liquidity) for a withdrawal of ``delta_x``.

    delta_y is paid rounded down; delta_liquidity is burned rounded up.
    """
    return _paired_allocation(False, delta_x, reserve_x, reserve_y, total_liquidity)


def compute_deallocation_given_y(
    delta_y: int, reserve_x: int, reserve_y: int, total_liquidity: int
) -> tuple[int, int]:
    """Derive (delta_x, delta_liquidity) for a withdrawal of ``delta_y``."""
    return _paired_allocation(False, delta_y, reserve_y, reserve_x, total_liquidity)
