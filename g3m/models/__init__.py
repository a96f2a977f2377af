"""Wire models and value objects for the G3M engine."""

from g3m.models.params import (
    ControllerUpdate,
    G3MInitData,
    G3MParams,
    NTokenG3MInitData,
    NTokenG3MParams,
    SwapFeeUpdate,
    UpdateCode,
    WeightsUpdate,
    decode_init_data,
    decode_pool_params,
    decode_update,
    encode,
)
from g3m.models.state import AllocationResult, CallContext, InitResult, PoolState, SwapResult
from g3m.models.types import Uint256

__all__ = [
    # Types
    "Uint256",
    # Init data
    "G3MInitData",
    "NTokenG3MInitData",
    # Parameter projections
    "G3MParams",
    "NTokenG3MParams",
    # Updates
    "UpdateCode",
    "SwapFeeUpdate",
    "WeightsUpdate",
    "ControllerUpdate",
    # Encoding
    "encode",
    "decode_init_data",
    "decode_pool_params",
    "decode_update",
    # State and results
    "PoolState",
    "CallContext",
    "InitResult",
    "AllocationResult",
    "SwapResult",
]
