"""Parse raw Polymarket-style JSON payloads into core snapshots.

Gamma market payloads encode list fields (``outcomes``, ``outcomePrices``,
``clobTokenIds``) as JSON strings; CLOB book payloads quote prices and sizes
as strings and do not promise any level ordering. This module normalizes both
and sorts book levels best-first, which the core relies on.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional

from polyshark.config.settings import Fees, settings
from polyshark.core.models import Market, OrderBook, PriceLevel
from polyshark.utils.logging import get_logger
from polyshark.utils.validation import (
    ValidationError,
    validate_binary_outcomes,
    validate_fee_bps,
    validate_identifier,
    validate_price,
    validate_size,
)


logger = get_logger("snapshots")


def _as_list(value: Any, label: str) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            parsed = [s.strip() for s in value.strip("[]").split(",") if s.strip()]
        if isinstance(parsed, list):
            return parsed
    raise ValidationError(f"{label} must be a list, got {type(value).__name__}")


def _optional_price(value: Any, label: str) -> Optional[float]:
    if value in (None, ""):
        return None
    return validate_price(value, label)


def _first(payload: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return default


def parse_market(payload: dict, fees: Optional[Fees] = None) -> Market:
    """Build a ``Market`` from a Gamma markets payload.

    ``fees`` supplies the maker/taker bps for payloads without fee fields and
    defaults to the module-level settings.

    Raises:
        ValidationError: On missing ids, mismatched outcome arrays or out-of-range values
    """
    market_id = validate_identifier(payload.get("id"), "id")
    outcomes = [str(o) for o in _as_list(payload.get("outcomes"), "outcomes")]
    prices = validate_binary_outcomes(outcomes, _as_list(payload.get("outcomePrices"), "outcomePrices"))
    tokens = [str(t) for t in _as_list(_first(payload, "clobTokenIds", "clob_token_ids"), "clobTokenIds")]

    fees = fees or settings.fees
    maker = _first(payload, "makerBaseFee", "maker_base_fee", default=fees.maker_bps)
    taker = _first(payload, "takerBaseFee", "taker_base_fee", default=fees.taker_bps)

    return Market(
        id=market_id,
        question=str(payload.get("question") or ""),
        outcomes=tuple(outcomes),
        outcome_prices=tuple(prices),
        slug=str(payload.get("slug") or ""),
        clob_token_ids=tuple(tokens),
        best_bid=_optional_price(payload.get("bestBid"), "bestBid"),
        best_ask=_optional_price(payload.get("bestAsk"), "bestAsk"),
        maker_base_fee=validate_fee_bps(maker, "makerBaseFee"),
        taker_base_fee=validate_fee_bps(taker, "takerBaseFee"),
        liquidity=validate_size(_first(payload, "liquidityNum", "liquidity", default=0.0), "liquidity"),
        volume_24hr=validate_size(_first(payload, "volume24hr", "volume_24hr", default=0.0), "volume24hr"),
        active=bool(payload.get("active", True)),
        accepting_orders=bool(_first(payload, "acceptingOrders", "accepting_orders", default=True)),
    )


def _parse_levels(raw: Any, label: str) -> List[PriceLevel]:
    levels = []
    for i, entry in enumerate(_as_list(raw, label)):
        if isinstance(entry, dict):
            price, size = entry.get("price"), entry.get("size")
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            price, size = entry
        else:
            raise ValidationError(f"{label}[{i}] must be a price/size pair")
        levels.append(
            PriceLevel(
                price=validate_price(price, f"{label}[{i}].price"),
                size=validate_size(size, f"{label}[{i}].size"),
            )
        )
    return levels


def parse_order_book(payload: dict) -> OrderBook:
    """Build an ``OrderBook`` from a CLOB book payload, best levels first.

    Raises:
        ValidationError: On a missing token id or malformed levels
    """
    token_id = validate_identifier(_first(payload, "asset_id", "token_id", "tokenId"), "asset_id")
    bids = sorted(_parse_levels(payload.get("bids"), "bids"), key=lambda lv: lv.price, reverse=True)
    asks = sorted(_parse_levels(payload.get("asks"), "asks"), key=lambda lv: lv.price)

    raw_ts = payload.get("timestamp") or 0
    try:
        timestamp = int(raw_ts)
    except (TypeError, ValueError):
        raise ValidationError(f"timestamp must be an integer, got '{raw_ts}'") from None

    return OrderBook(token_id=token_id, bids=tuple(bids), asks=tuple(asks), timestamp=timestamp)


def parse_markets(payloads: List[dict], fees: Optional[Fees] = None) -> List[Market]:
    """Parse a batch, dropping (and logging) payloads that fail validation."""
    markets: List[Market] = []
    for payload in payloads:
        try:
            markets.append(parse_market(payload, fees))
        except ValidationError as exc:
            logger.warning("Skipping market %s: %s", payload.get("id"), exc)
    return markets
