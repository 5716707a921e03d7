"""Trade data models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TradeSide(str, Enum):
    """Side of the taker order, as encoded by Kraken."""

    BUY = "b"
    SELL = "s"


class OrderType(str, Enum):
    """Type of the taker order, as encoded by Kraken."""

    MARKET = "m"
    LIMIT = "l"


class Trade(BaseModel):
    """Represents one executed trade from the public trade feed."""

    price: float = Field(..., ge=0, description="Execution price")
    volume: float = Field(..., ge=0, description="Traded volume")
    timestamp: int = Field(..., description="Trade time in seconds since epoch")
    side: TradeSide = Field(..., description="Trade side (b/s)")
    order_type: Optional[OrderType] = Field(default=None, description="Order type (m/l)")
    misc: str = Field(default="", description="Miscellaneous info")

    model_config = {"frozen": True}


class TradeBatch(BaseModel):
    """Trades returned by one Trades call plus the cursor for the next one."""

    pair: str = Field(..., min_length=1, description="Requested pair")
    trades: list[Trade] = Field(default_factory=list, description="Trades in server order")
    cursor: str = Field(..., description="Opaque 'last' token for the next call")

    model_config = {"frozen": True}
