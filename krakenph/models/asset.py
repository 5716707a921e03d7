"""Asset and asset pair reference data models."""

from typing import Optional

from pydantic import BaseModel, Field


class Asset(BaseModel):
    """Represents one asset listed by the Assets method."""

    name: str = Field(..., description="Kraken asset name")
    altname: str = Field(default="", description="Alternate name")
    aclass: str = Field(default="", description="Asset class")
    decimals: int = Field(default=0, description="Scaling decimal places for record keeping")
    display_decimals: int = Field(default=0, description="Scaling decimal places for output")

    model_config = {"frozen": True, "extra": "ignore"}


class AssetPair(BaseModel):
    """Represents one tradable pair listed by the AssetPairs method."""

    name: str = Field(..., description="Kraken pair name")
    altname: str = Field(default="", description="Alternate pair name")
    aclass_base: str = Field(default="", description="Asset class of base component")
    base: str = Field(default="", description="Base asset")
    aclass_quote: str = Field(default="", description="Asset class of quote component")
    quote: str = Field(default="", description="Quote asset")
    lot: str = Field(default="", description="Volume lot size")
    pair_decimals: int = Field(default=0, description="Price decimal places")
    lot_decimals: int = Field(default=0, description="Volume decimal places")
    lot_multiplier: int = Field(default=1, description="Lot multiplier")
    fee_volume_currency: str = Field(default="", description="Volume discount currency")
    margin_call: Optional[int] = Field(default=None, description="Margin call level")
    margin_stop: Optional[int] = Field(default=None, description="Stop-out level")

    model_config = {"frozen": True, "extra": "ignore"}
