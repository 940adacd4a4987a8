"""Pydantic read model for pool state.

Amounts are rendered as decimal strings so values survive JSON round trips
without float rounding.
"""

from typing import Annotated

from pydantic import BaseModel, Field

# Fixed-point amount rendered as a decimal string, e.g. "57.5666492420"
DecimalStr = Annotated[str, Field(pattern=r"^-?\d+(\.\d+)?$")]


class PoolSnapshot(BaseModel):
    """Point-in-time view of an LpPool."""

    price: DecimalStr = Field(description="Base tokens per staked token")
    token_amount: DecimalStr = Field(
        alias="tokenAmount",
        description="Base token reserve",
    )
    st_token_amount: DecimalStr = Field(
        alias="stTokenAmount",
        description="Staked token reserve",
    )
    lp_token_amount: DecimalStr = Field(
        alias="lpTokenAmount",
        description="Total pool shares outstanding",
    )
    liquidity_target: DecimalStr = Field(
        alias="liquidityTarget",
        description="Base reserve at which the swap fee reaches min_fee",
    )
    min_fee: DecimalStr = Field(alias="minFee")
    max_fee: DecimalStr = Field(alias="maxFee")

    model_config = {"populate_by_name": True, "frozen": True}
