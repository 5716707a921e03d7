"""Decoding of parsed Kraken results into models."""

from typing import Any, Optional

from pydantic import ValidationError

from krakenph.errors import DecodeError, MissingDataError
from krakenph.models import Asset, AssetPair, OrderType, Trade, TradeBatch, TradeSide


def decode_trade(record: Any, index: Optional[int] = None, pair: Optional[str] = None) -> Trade:
    """Decode one ``[price, volume, time, side, type, misc]`` record.

    Prices and volumes may arrive as strings or numbers. Fractional times
    are truncated to whole seconds. The type and misc fields are optional.

    Raises:
        DecodeError: If the record is malformed.
    """
    if not isinstance(record, (list, tuple)) or len(record) < 4:
        raise DecodeError(f"expected trade array, got {record!r}", method="Trades", pair=pair, index=index)

    try:
        price = float(record[0])
        volume = float(record[1])
        timestamp = int(float(record[2]))
        side = TradeSide(str(record[3]))
        order_type = OrderType(str(record[4])) if len(record) > 4 and record[4] else None
        misc = str(record[5]) if len(record) > 5 and record[5] is not None else ""
        return Trade(
            price=price,
            volume=volume,
            timestamp=timestamp,
            side=side,
            order_type=order_type,
            misc=misc,
        )
    except (TypeError, ValueError, OverflowError, ValidationError) as e:
        raise DecodeError(f"malformed trade {record!r}: {e}", method="Trades", pair=pair, index=index) from e


def decode_trades(result: Any, pair: str) -> TradeBatch:
    """Decode a Trades result for ``pair`` into a TradeBatch.

    Trades keep server order. The ``last`` cursor is kept verbatim.

    Raises:
        MissingDataError: If the pair's array or ``last`` is absent.
        DecodeError: If a record is malformed.
    """
    if not isinstance(result, dict) or not result:
        raise MissingDataError("result", method="Trades", pair=pair)
    if pair not in result:
        raise MissingDataError(pair, method="Trades", pair=pair)
    if "last" not in result:
        raise MissingDataError("last", method="Trades", pair=pair)

    records = result[pair]
    if not isinstance(records, list):
        raise DecodeError(f"expected trade list, got {type(records).__name__}", method="Trades", pair=pair)

    trades = [decode_trade(record, index=i, pair=pair) for i, record in enumerate(records)]
    return TradeBatch(pair=pair, trades=trades, cursor=str(result["last"]))


def decode_assets(result: Any) -> list[Asset]:
    """Decode an Assets result.

    Raises:
        DecodeError: If the result is not a mapping of asset entries.
    """
    if not isinstance(result, dict):
        raise DecodeError("expected asset mapping", method="Assets")
    try:
        return [Asset(name=name, **info) for name, info in result.items()]
    except (TypeError, ValidationError) as e:
        raise DecodeError(f"malformed asset: {e}", method="Assets") from e


def decode_asset_pairs(result: Any) -> list[AssetPair]:
    """Decode an AssetPairs result.

    Raises:
        DecodeError: If the result is not a mapping of pair entries.
    """
    if not isinstance(result, dict):
        raise DecodeError("expected asset pair mapping", method="AssetPairs")
    try:
        return [AssetPair(name=name, **info) for name, info in result.items()]
    except (TypeError, ValidationError) as e:
        raise DecodeError(f"malformed asset pair: {e}", method="AssetPairs") from e
