"""Pydantic wire models for curve parameters and controller updates.

Every blob is JSON tagged with an explicit schema tag: ``kind`` (curve
family) plus ``version`` for init data and parameter projections, ``code`` for
updates. Integers travel as decimal strings so the encoding round-trips
losslessly.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from g3m.errors import InvalidParamsEncoding, InvalidUpdateCode
from g3m.models.types import Uint256

SCHEMA_VERSION = 1

_MODEL_CONFIG = {"extra": "forbid", "frozen": True, "populate_by_name": True}


# =============================================================================
# Init data
# =============================================================================


class G3MInitData(BaseModel):
    """Init payload for a two-token pool.

    When ``liquidity`` is omitted it is solved from the reserves.
    """

    kind: Literal["g3m"] = "g3m"
    version: Literal[1] = SCHEMA_VERSION
    reserve_x: Uint256 = Field(alias="reserveX")
    reserve_y: Uint256 = Field(alias="reserveY")
    liquidity: Uint256 | None = None
    w_x: Uint256 = Field(alias="wX")
    swap_fee: Uint256 = Field(alias="swapFee")
    controller: str = ""

    model_config = _MODEL_CONFIG


class NTokenG3MInitData(BaseModel):
    """Init payload for an N-token pool.

    When ``liquidity`` is omitted it is solved from the reserves.
    """

    kind: Literal["ntoken_g3m"] = "ntoken_g3m"
    version: Literal[1] = SCHEMA_VERSION
    reserves: tuple[Uint256, ...]
    liquidity: Uint256 | None = None
    weights: tuple[Uint256, ...]
    swap_fee: Uint256 = Field(alias="swapFee")
    controller: str = ""

    model_config = _MODEL_CONFIG


InitData = Annotated[Union[G3MInitData, NTokenG3MInitData], Field(discriminator="kind")]


# =============================================================================
# Parameter projections
# =============================================================================


class G3MParams(BaseModel):
    """Actualized two-token parameters."""

    kind: Literal["g3m"] = "g3m"
    version: Literal[1] = SCHEMA_VERSION
    w_x: Uint256 = Field(alias="wX")
    w_y: Uint256 = Field(alias="wY")
    swap_fee: Uint256 = Field(alias="swapFee")
    controller: str

    model_config = _MODEL_CONFIG


class NTokenG3MParams(BaseModel):
    """Actualized N-token parameters."""

    kind: Literal["ntoken_g3m"] = "ntoken_g3m"
    version: Literal[1] = SCHEMA_VERSION
    weights: tuple[Uint256, ...]
    swap_fee: Uint256 = Field(alias="swapFee")
    controller: str

    model_config = _MODEL_CONFIG


PoolParams = Annotated[Union[G3MParams, NTokenG3MParams], Field(discriminator="kind")]

_INIT_DATA_ADAPTER: TypeAdapter[G3MInitData | NTokenG3MInitData] = TypeAdapter(InitData)
_POOL_PARAMS_ADAPTER: TypeAdapter[G3MParams | NTokenG3MParams] = TypeAdapter(PoolParams)


# =============================================================================
# Updates
# =============================================================================


class UpdateCode(str, Enum):
    """Tag of a controller update payload."""

    SWAP_FEE = "swap_fee"
    WEIGHTS = "weights"
    CONTROLLER = "controller"


class SwapFeeUpdate(BaseModel):
    code: Literal["swap_fee"] = "swap_fee"
    swap_fee: Uint256 = Field(alias="swapFee")

    model_config = _MODEL_CONFIG


class WeightsUpdate(BaseModel):
    """Retarget the weight vector, reached at ``update_end``.

    Two-token pools take ``[wX, wY]``.
    """

    code: Literal["weights"] = "weights"
    target_weights: tuple[Uint256, ...] = Field(alias="targetWeights")
    update_end: int = Field(alias="updateEnd", ge=0)

    model_config = _MODEL_CONFIG


class ControllerUpdate(BaseModel):
    code: Literal["controller"] = "controller"
    controller: str

    model_config = _MODEL_CONFIG


ParamsUpdate = Union[SwapFeeUpdate, WeightsUpdate, ControllerUpdate]

_UPDATE_MODELS: dict[UpdateCode, type[BaseModel]] = {
    UpdateCode.SWAP_FEE: SwapFeeUpdate,
    UpdateCode.WEIGHTS: WeightsUpdate,
    UpdateCode.CONTROLLER: ControllerUpdate,
}


# =============================================================================
# Encoding
# =============================================================================


def encode(model: BaseModel) -> bytes:
    """Encode any wire model as JSON bytes (by alias)."""
    return model.model_dump_json(by_alias=True).encode()


def decode_init_data(blob: bytes | str) -> G3MInitData | NTokenG3MInitData:
    """Decode an init payload, dispatching on its ``kind`` tag.

    Raises:
        InvalidParamsEncoding: If the blob is malformed or its tag unknown
    """
    try:
        return _INIT_DATA_ADAPTER.validate_json(blob)
    except ValidationError as err:
        raise InvalidParamsEncoding(f"Invalid init data: {err}") from err


def decode_pool_params(blob: bytes | str) -> G3MParams | NTokenG3MParams:
    """Decode a parameter projection produced by ``get_pool_params``.

    Raises:
        InvalidParamsEncoding: If the blob is malformed or its tag unknown
    """
    try:
        return _POOL_PARAMS_ADAPTER.validate_json(blob)
    except ValidationError as err:
        raise InvalidParamsEncoding(f"Invalid pool params: {err}") from err


def decode_update(blob: bytes | str) -> ParamsUpdate:
    """Decode a controller update, dispatching on its ``code`` tag.

    Raises:
        InvalidUpdateCode: If the tag is missing or unrecognized
        InvalidParamsEncoding: If the blob or its payload is malformed
    """
    try:
        payload = json.loads(blob)
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        raise InvalidParamsEncoding(f"Update is not valid JSON: {err}") from err
    if not isinstance(payload, dict):
        raise InvalidParamsEncoding("Update payload must be a JSON object")

    raw_code = payload.get("code")
    try:
        code = UpdateCode(raw_code)
    except ValueError as err:
        raise InvalidUpdateCode(f"Unknown update code: {raw_code!r}") from err

    try:
        return _UPDATE_MODELS[code].model_validate(payload)  # type: ignore[return-value]
    except ValidationError as err:
        raise InvalidParamsEncoding(f"Invalid {code.value} update: {err}") from err
