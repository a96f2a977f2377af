"""Shared strategy machinery.

A strategy owns an arena of pool records keyed by a stable pool id. Records
are immutable snapshots of a pool's curve parameters; an accepted update
replaces the snapshot in one assignment, so a reader never observes a
half-written record. Validations are pure: they read the record and the pool
state passed in by the orchestrator and either return a result or raise.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

import structlog
from pydantic import BaseModel

from g3m.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from g3m.curves.base import Curve
from g3m.errors import (
    DeltaBelowMinimum,
    DeltaExceedsMaximum,
    DomainError,
    G3MError,
    InvalidConfiguration,
    InvalidSwapFee,
    NotEnoughLiquidity,
    PoolAlreadyInitialized,
    PoolNotFound,
    UnauthorizedCaller,
)
from g3m.math.deltas import (
    compute_allocation_deltas,
    compute_deallocation_deltas,
    compute_delta_l_given_delta_in,
)
from g3m.math.fixed_point import WAD
from g3m.models.params import (
    ControllerUpdate,
    ParamsUpdate,
    SwapFeeUpdate,
    WeightsUpdate,
    decode_update,
    encode,
)
from g3m.models.state import AllocationResult, CallContext, InitResult, PoolState, SwapResult

logger = structlog.get_logger()

R = TypeVar("R")  # pool record
P = TypeVar("P")  # actualized curve params


def _wall_clock() -> int:
    return int(time.time())


def validate_swap_fee(swap_fee: int) -> int:
    """Check the fee is in [0, 1 WAD)."""
    if not 0 <= swap_fee < WAD:
        raise InvalidSwapFee(swap_fee)
    return swap_fee


class BaseStrategy(ABC, Generic[R, P]):
    """Validation entry points shared by every G3M curve family.

    Args:
        orchestrator: Identity of the only caller allowed to invoke
            mutating entry points
        config: Engine configuration (default: DEFAULT_ENGINE_CONFIG)
        clock: Returns the current time in seconds; injectable for tests
    """

    name: str = "base"

    def __init__(
        self,
        orchestrator: str,
        *,
        config: EngineConfig | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.orchestrator = orchestrator
        self.config = config or DEFAULT_ENGINE_CONFIG
        self._clock = clock or _wall_clock
        self._pools: dict[int, R] = {}

    # -------------------------------------------------------------------------
    # Family hooks
    # -------------------------------------------------------------------------

    @property
    @abstractmethod
    def curve(self) -> Curve[P]: ...

    @abstractmethod
    def actualize(self, record: R, now: int) -> P:
        """Curve parameters of ``record`` as of ``now``."""

    @abstractmethod
    def weights_of(self, params: P) -> tuple[int, ...]: ...

    @abstractmethod
    def swap_fee_of(self, params: P) -> int: ...

    @abstractmethod
    def controller_of(self, record: R) -> str: ...

    @abstractmethod
    def apply_weights(self, record: R, update: WeightsUpdate, now: int) -> R: ...

    @abstractmethod
    def apply_swap_fee(self, record: R, swap_fee: int) -> R: ...

    @abstractmethod
    def apply_controller(self, record: R, controller: str) -> R: ...

    @abstractmethod
    def to_wire(self, record: R, now: int) -> BaseModel:
        """Pydantic projection of the actualized record."""

    # -------------------------------------------------------------------------
    # Pool records
    # -------------------------------------------------------------------------

    def now(self) -> int:
        return self._clock()

    def __contains__(self, pool_id: int) -> bool:
        return pool_id in self._pools

    def get_record(self, pool_id: int) -> R:
        """Stored record for ``pool_id``.

        Raises:
            PoolNotFound: If the pool was never initialized
        """
        try:
            return self._pools[pool_id]
        except KeyError as err:
            raise PoolNotFound(f"No pool with id {pool_id}") from err

    def curve_params(self, pool_id: int) -> P:
        """Actualized curve parameters of ``pool_id`` at the current time."""
        return self.actualize(self.get_record(pool_id), self.now())

    def is_valid(self, invariant: int) -> bool:
        return self.config.is_within_epsilon(invariant)

    def _authorize(self, ctx: CallContext) -> None:
        if ctx.caller != self.orchestrator:
            logger.warning(
                "unauthorized_caller",
                strategy=self.name,
                caller=ctx.caller,
                expected=self.orchestrator,
            )
            raise UnauthorizedCaller(f"Caller {ctx.caller} is not the orchestrator")

    def _check_state(self, state: PoolState, params: P) -> None:
        """Reject a pool state whose reserve vector does not match the weights."""
        n_weights = len(self.weights_of(params))
        if len(state.reserves) != n_weights:
            raise InvalidConfiguration(len(state.reserves), n_weights)

    def _init_pool(
        self,
        ctx: CallContext,
        pool_id: int,
        record: R,
        reserves: Sequence[int],
        liquidity: int | None,
    ) -> InitResult:
        self._authorize(ctx)
        if pool_id in self._pools:
            raise PoolAlreadyInitialized(f"Pool {pool_id} already initialized")

        params = self.actualize(record, self.now())
        weights = self.weights_of(params)
        if len(reserves) != len(weights):
            raise InvalidConfiguration(len(reserves), len(weights))
        validate_swap_fee(self.swap_fee_of(params))

        reserves = tuple(reserves)
        if liquidity is None:
            liquidity = self.curve.solve_liquidity(reserves, params, self.config)
        invariant = self.curve.trading_function(reserves, liquidity, params)
        valid = self.is_valid(invariant)

        if valid:
            self._pools[pool_id] = record
            logger.info(
                "pool_initialized",
                strategy=self.name,
                pool_id=pool_id,
                liquidity=liquidity,
                invariant=invariant,
            )
        else:
            logger.warning(
                "pool_init_rejected",
                strategy=self.name,
                pool_id=pool_id,
                liquidity=liquidity,
                invariant=invariant,
            )
        return InitResult(valid=valid, invariant=invariant, reserves=reserves, liquidity=liquidity)

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    def validate_allocate(
        self,
        ctx: CallContext,
        pool_id: int,
        max_deltas: Sequence[int],
        delta_liquidity: int,
        state: PoolState,
    ) -> AllocationResult:
        """Validate a proportional deposit minting ``delta_liquidity``.

        Raises:
            DeltaExceedsMaximum: If a computed delta exceeds its maximum
        """
        self._authorize(ctx)
        params = self.curve_params(pool_id)
        self._check_state(state, params)
        if len(max_deltas) != len(state.reserves):
            raise DomainError(
                f"Expected {len(state.reserves)} maximum deltas, got {len(max_deltas)}"
            )

        deltas = compute_allocation_deltas(state.reserves, delta_liquidity, state.total_liquidity)
        for maximum, delta in zip(max_deltas, deltas):
            if delta > maximum:
                logger.warning(
                    "allocate_delta_exceeds_maximum",
                    pool_id=pool_id,
                    maximum=maximum,
                    delta=delta,
                )
                raise DeltaExceedsMaximum(expected=maximum, actual=delta)

        next_reserves = tuple(r + d for r, d in zip(state.reserves, deltas))
        next_liquidity = state.total_liquidity + delta_liquidity
        invariant = self.curve.trading_function(next_reserves, next_liquidity, params)
        return AllocationResult(
            valid=self.is_valid(invariant),
            invariant=invariant,
            deltas=deltas,
            delta_liquidity=delta_liquidity,
        )

    def validate_deallocate(
        self,
        ctx: CallContext,
        pool_id: int,
        min_deltas: Sequence[int],
        delta_liquidity: int,
        state: PoolState,
    ) -> AllocationResult:
        """Validate a proportional withdrawal burning ``delta_liquidity``.

        Raises:
            DeltaBelowMinimum: If a computed delta is below its minimum
        """
        self._authorize(ctx)
        params = self.curve_params(pool_id)
        self._check_state(state, params)
        if len(min_deltas) != len(state.reserves):
            raise DomainError(
                f"Expected {len(state.reserves)} minimum deltas, got {len(min_deltas)}"
            )

        deltas = compute_deallocation_deltas(
            state.reserves, delta_liquidity, state.total_liquidity
        )
        for minimum, delta in zip(min_deltas, deltas):
            if delta < minimum:
                logger.warning(
                    "deallocate_delta_below_minimum",
                    pool_id=pool_id,
                    minimum=minimum,
                    delta=delta,
                )
                raise DeltaBelowMinimum(expected=minimum, actual=delta)

        next_reserves = tuple(r - d for r, d in zip(state.reserves, deltas))
        next_liquidity = state.total_liquidity - delta_liquidity
        invariant = self.curve.trading_function(next_reserves, next_liquidity, params)
        return AllocationResult(
            valid=self.is_valid(invariant),
            invariant=invariant,
            deltas=deltas,
            delta_liquidity=delta_liquidity,
        )

    # -------------------------------------------------------------------------
    # Swap
    # -------------------------------------------------------------------------

    def _validate_swap(
        self,
        ctx: CallContext,
        pool_id: int,
        amount_in: int,
        amount_out: int,
        index_in: int,
        index_out: int,
        state: PoolState,
        direction: bool | tuple[int, int],
    ) -> SwapResult:
        self._authorize(ctx)
        params = self.curve_params(pool_id)
        self._check_state(state, params)

        n_tokens = len(state.reserves)
        if not (0 <= index_in < n_tokens and 0 <= index_out < n_tokens):
            raise DomainError(f"Swap indices ({index_in}, {index_out}) out of range")
        if index_in == index_out:
            raise DomainError("Cannot swap token with itself")

        reserve_out = state.reserves[index_out]
        if amount_out > reserve_out:
            logger.warning(
                "swap_not_enough_liquidity",
                pool_id=pool_id,
                amount_out=amount_out,
                reserve_out=reserve_out,
            )
            raise NotEnoughLiquidity(f"Output {amount_out} exceeds reserve {reserve_out}")

        weight_in = self.weights_of(params)[index_in]
        delta_liquidity = compute_delta_l_given_delta_in(
            weight_in,
            self.swap_fee_of(params),
            state.total_liquidity,
            amount_in,
            state.reserves[index_in],
        )

        next_reserves = list(state.reserves)
        next_reserves[index_in] += amount_in
        next_reserves[index_out] -= amount_out
        invariant = self.curve.trading_function(
            next_reserves, state.total_liquidity + delta_liquidity, params
        )
        valid = self.is_valid(invariant)

        logger.debug(
            "swap_validated",
            pool_id=pool_id,
            amount_in=amount_in,
            amount_out=amount_out,
            delta_liquidity=delta_liquidity,
            invariant=invariant,
            valid=valid,
        )
        return SwapResult(
            valid=valid,
            invariant=invariant,
            deltas=(amount_in, amount_out),
            delta_liquidity=delta_liquidity,
            direction=direction,
        )

    # -------------------------------------------------------------------------
    # Controller updates
    # -------------------------------------------------------------------------

    def update(
        self,
        ctx: CallContext,
        pool_id: int,
        update_blob: bytes | str,
        state: PoolState | None = None,
    ) -> None:
        """Apply a controller update to the pool record.

        The record is replaced only after the update validates, so on any
        error the stored parameters are unchanged.

        Args:
            ctx: Call context; caller must be the orchestrator and sender the
                pool controller
            pool_id: Pool to update
            update_blob: Encoded update payload
            state: Current pool state as seen by the orchestrator. Unused:
                no update depends on reserves or liquidity.

        Raises:
            UnauthorizedCaller: If the sender is not the pool controller
            InvalidUpdateCode: If the update tag is unknown
            InvalidWeights: If retargeted weights do not sum to 1 WAD
            DomainError: If retargeted weights do not match the pool's
                token count
        """
        self._authorize(ctx)
        record = self.get_record(pool_id)
        controller = self.controller_of(record)
        if ctx.sender != controller:
            logger.warning(
                "update_unauthorized_sender",
                pool_id=pool_id,
                sender=ctx.sender,
                controller=controller,
            )
            raise UnauthorizedCaller(f"Sender {ctx.sender} is not the pool controller")

        try:
            update = decode_update(update_blob)
            updated = self._apply_update(record, update, self.now())
        except G3MError as err:
            logger.warning("pool_update_rejected", pool_id=pool_id, error=str(err))
            raise

        self._pools[pool_id] = updated
        logger.info("pool_params_updated", pool_id=pool_id, code=update.code)

    def _apply_update(self, record: R, update: ParamsUpdate, now: int) -> R:
        if isinstance(update, SwapFeeUpdate):
            return self.apply_swap_fee(record, validate_swap_fee(update.swap_fee))
        if isinstance(update, WeightsUpdate):
            return self.apply_weights(record, update, now)
        if isinstance(update, ControllerUpdate):
            return self.apply_controller(record, update.controller)
        raise TypeError(f"Unknown update type: {type(update)}")

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    def get_pool_params(self, pool_id: int) -> bytes:
        """Encoded actualized parameters of ``pool_id``."""
        return encode(self.to_wire(self.get_record(pool_id), self.now()))

    def compute_swap_constant(
        self, reserves: Sequence[int], liquidity: int, pool_id: int
    ) -> int:
        """Invariant of ``reserves`` at ``liquidity`` under the pool's parameters."""
        return self.curve.trading_function(tuple(reserves), liquidity, self.curve_params(pool_id))
