"""Two-token G3M strategy."""

from __future__ import annotations

from dataclasses import dataclass, replace

from g3m.curves.g3m import G3M_CURVE, N_TOKENS, G3MCurve, G3MCurveParams, compute_price
from g3m.curves.ntoken import validate_weights
from g3m.dynamic_param import DynamicParam
from g3m.errors import DomainError, InvalidParamsEncoding
from g3m.models.params import G3MInitData, G3MParams, WeightsUpdate, decode_init_data
from g3m.models.state import CallContext, InitResult, PoolState, SwapResult

from .base import BaseStrategy


@dataclass(frozen=True)
class G3MPoolRecord:
    """Stored parameters of a two-token pool; wY is always 1 - wX."""

    w_x: DynamicParam
    swap_fee: int
    controller: str


class G3MStrategy(BaseStrategy[G3MPoolRecord, G3MCurveParams]):
    """Validates transitions of two-token weighted geometric mean pools.

    Reserves are (rX, rY). Swap direction is ``swap_x_in``: True sells X for Y.
    """

    name = "g3m"

    @property
    def curve(self) -> G3MCurve:
        return G3M_CURVE

    def actualize(self, record: G3MPoolRecord, now: int) -> G3MCurveParams:
        return G3MCurveParams(w_x=record.w_x.actualized(now), swap_fee=record.swap_fee)

    def weights_of(self, params: G3MCurveParams) -> tuple[int, ...]:
        return (params.w_x, params.w_y)

    def swap_fee_of(self, params: G3MCurveParams) -> int:
        return params.swap_fee

    def controller_of(self, record: G3MPoolRecord) -> str:
        return record.controller

    def apply_weights(
        self, record: G3MPoolRecord, update: WeightsUpdate, now: int
    ) -> G3MPoolRecord:
        targets = update.target_weights
        if len(targets) != N_TOKENS:
            raise DomainError(f"Expected {N_TOKENS} target weights, got {len(targets)}")
        validate_weights(targets)
        return replace(record, w_x=record.w_x.set(targets[0], update.update_end, now))

    def apply_swap_fee(self, record: G3MPoolRecord, swap_fee: int) -> G3MPoolRecord:
        return replace(record, swap_fee=swap_fee)

    def apply_controller(self, record: G3MPoolRecord, controller: str) -> G3MPoolRecord:
        return replace(record, controller=controller)

    def to_wire(self, record: G3MPoolRecord, now: int) -> G3MParams:
        params = self.actualize(record, now)
        return G3MParams(
            w_x=params.w_x,
            w_y=params.w_y,
            swap_fee=params.swap_fee,
            controller=record.controller,
        )

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def init(self, ctx: CallContext, pool_id: int, init_data: bytes | str) -> InitResult:
        """Decode init data, store the pool record and report invariant validity.

        If ``init_data`` omits liquidity it is solved from the reserves.

        Raises:
            InvalidParamsEncoding: If the blob is not two-token init data
            DomainError / InvalidSwapFee: If parameters are out of range
        """
        data = decode_init_data(init_data)
        if not isinstance(data, G3MInitData):
            raise InvalidParamsEncoding(f"Expected g3m init data, got {data.kind}")

        record = G3MPoolRecord(
            w_x=DynamicParam.constant(data.w_x, self.now()),
            swap_fee=data.swap_fee,
            controller=data.controller,
        )
        return self._init_pool(
            ctx, pool_id, record, (data.reserve_x, data.reserve_y), data.liquidity
        )

    def validate_swap(
        self,
        ctx: CallContext,
        pool_id: int,
        amount_in: int,
        amount_out: int,
        swap_x_in: bool,
        state: PoolState,
    ) -> SwapResult:
        """Validate a swap of ``amount_in`` for ``amount_out``.

        Raises:
            NotEnoughLiquidity: If amount_out exceeds the output reserve
        """
        index_in, index_out = (0, 1) if swap_x_in else (1, 0)
        return self._validate_swap(
            ctx, pool_id, amount_in, amount_out, index_in, index_out, state, swap_x_in
        )

    def get_price(self, pool_id: int, state: PoolState) -> int:
        """Spot price of X in Y for ``state``."""
        return compute_price(state.reserve_x, state.reserve_y, self.curve_params(pool_id))
