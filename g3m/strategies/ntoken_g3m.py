"""N-token G3M strategy."""

from __future__ import annotations

from dataclasses import dataclass, replace

from g3m.curves.ntoken import (
    NTOKEN_G3M_CURVE,
    NTokenCurveParams,
    NTokenG3MCurve,
    compute_price,
    validate_weights,
)
from g3m.dynamic_param import DynamicParam
from g3m.errors import DomainError, InvalidParamsEncoding
from g3m.math.fixed_point import WAD
from g3m.models.params import (
    NTokenG3MInitData,
    NTokenG3MParams,
    WeightsUpdate,
    decode_init_data,
)
from g3m.models.state import CallContext, InitResult, PoolState, SwapResult

from .base import BaseStrategy


@dataclass(frozen=True)
class NTokenPoolRecord:
    """Stored parameters of an N-token pool.

    Each weight interpolates independently; the last one is read back as
    1 WAD minus the others so the actualized vector always sums to 1 WAD.
    """

    weights: tuple[DynamicParam, ...]
    swap_fee: int
    controller: str


class NTokenG3MStrategy(BaseStrategy[NTokenPoolRecord, NTokenCurveParams]):
    """Validates transitions of N-token weighted geometric mean pools.

    Swap direction is a ``(index_in, index_out)`` pair.
    """

    name = "ntoken_g3m"

    @property
    def curve(self) -> NTokenG3MCurve:
        return NTOKEN_G3M_CURVE

    def actualize(self, record: NTokenPoolRecord, now: int) -> NTokenCurveParams:
        head = tuple(w.actualized(now) for w in record.weights[:-1])
        # rounding in the interpolation would otherwise leave the sum a few wei off
        weights = head + (WAD - sum(head),)
        return NTokenCurveParams(weights=weights, swap_fee=record.swap_fee)

    def weights_of(self, params: NTokenCurveParams) -> tuple[int, ...]:
        return params.weights

    def swap_fee_of(self, params: NTokenCurveParams) -> int:
        return params.swap_fee

    def controller_of(self, record: NTokenPoolRecord) -> str:
        return record.controller

    def apply_weights(
        self, record: NTokenPoolRecord, update: WeightsUpdate, now: int
    ) -> NTokenPoolRecord:
        targets = update.target_weights
        if len(targets) != len(record.weights):
            raise DomainError(
                f"Expected {len(record.weights)} target weights, got {len(targets)}"
            )
        validate_weights(targets)
        weights = tuple(
            param.set(target, update.update_end, now)
            for param, target in zip(record.weights, targets)
        )
        return replace(record, weights=weights)

    def apply_swap_fee(self, record: NTokenPoolRecord, swap_fee: int) -> NTokenPoolRecord:
        return replace(record, swap_fee=swap_fee)

    def apply_controller(self, record: NTokenPoolRecord, controller: str) -> NTokenPoolRecord:
        return replace(record, controller=controller)

    def to_wire(self, record: NTokenPoolRecord, now: int) -> NTokenG3MParams:
        params = self.actualize(record, now)
        return NTokenG3MParams(
            weights=params.weights,
            swap_fee=params.swap_fee,
            controller=record.controller,
        )

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def init(self, ctx: CallContext, pool_id: int, init_data: bytes | str) -> InitResult:
        """Decode init data, store the pool record and report invariant validity.

        Raises:
            InvalidParamsEncoding: If the blob is not N-token init data
            InvalidWeights: If the weights do not sum to 1 WAD
            InvalidConfiguration: If reserves and weights differ in length
        """
        data = decode_init_data(init_data)
        if not isinstance(data, NTokenG3MInitData):
            raise InvalidParamsEncoding(f"Expected ntoken_g3m init data, got {data.kind}")
        validate_weights(data.weights)

        now = self.now()
        record = NTokenPoolRecord(
            weights=tuple(DynamicParam.constant(w, now) for w in data.weights),
            swap_fee=data.swap_fee,
            controller=data.controller,
        )
        return self._init_pool(ctx, pool_id, record, data.reserves, data.liquidity)

    def validate_swap(
        self,
        ctx: CallContext,
        pool_id: int,
        amount_in: int,
        amount_out: int,
        direction: tuple[int, int],
        state: PoolState,
    ) -> SwapResult:
        """Validate a swap of token ``direction[0]`` for token ``direction[1]``.

        Raises:
            DomainError: If an index is out of range or both are equal
            NotEnoughLiquidity: If amount_out exceeds the output reserve
        """
        index_in, index_out = direction
        return self._validate_swap(
            ctx, pool_id, amount_in, amount_out, index_in, index_out, state, direction
        )

    def get_price(
        self,
        pool_id: int,
        state: PoolState,
        token_index: int,
        numeraire_index: int | None = None,
    ) -> int:
        """Spot price of ``token_index`` in the numeraire (last token by default)."""
        return compute_price(
            state.reserves, self.curve_params(pool_id), token_index, numeraire_index
        )
