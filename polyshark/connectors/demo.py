from __future__ import annotations

import random
from typing import Dict, List, Optional, Tuple

from polyshark.config.constants import MAX_PRICE, MIN_PRICE
from polyshark.config.settings import Fees
from polyshark.connectors.snapshots import parse_markets, parse_order_book
from polyshark.core.models import Market, OrderBook


EVENTS = [
    ("Will Fed cut rates in Dec 2025?", "fed-cut-dec-2025"),
    ("BTC to close > $100k in 2025?", "btc-100k-2025"),
    ("US CPI YoY Oct 2025 >= 3.0?", "us-cpi-oct-2025"),
    ("Will ETH flip BTC market cap in 2025?", "eth-flippening-2025"),
]


def _clip_price(p: float) -> float:
    return round(max(MIN_PRICE, min(MAX_PRICE, p)), 3)


def _book_payload(rng: random.Random, token_id: str, price: float, timestamp: int) -> dict:
    tick = 0.01
    bids = [[_clip_price(price - tick * (i + 1)), round(rng.uniform(100, 800), 2)] for i in range(3)]
    asks = [[_clip_price(price + tick * (i + 1)), round(rng.uniform(100, 800), 2)] for i in range(3)]
    rng.shuffle(bids)  # the parser is responsible for ordering
    return {"asset_id": token_id, "bids": bids, "asks": asks, "timestamp": str(timestamp)}


def demo_payloads(seed: Optional[int] = None, timestamp: int = 0) -> Tuple[List[dict], List[dict]]:
    """Gamma-style market payloads and CLOB-style book payloads for the demo events."""
    rng = random.Random(seed)
    markets: List[dict] = []
    books: List[dict] = []
    for idx, (question, slug) in enumerate(EVENTS):
        yes_price = _clip_price(rng.uniform(0.2, 0.8))
        # Skew the NO side so some markets violate the price-sum constraint
        no_price = _clip_price(1 - yes_price + rng.uniform(-0.08, 0.08))
        yes_token, no_token = f"{slug}-yes", f"{slug}-no"
        markets.append(
            {
                "id": str(1000 + idx),
                "question": question,
                "slug": slug,
                "outcomes": '["Yes", "No"]',
                "outcomePrices": f'["{yes_price}", "{no_price}"]',
                "clobTokenIds": f'["{yes_token}", "{no_token}"]',
                "makerBaseFee": 0,
                "takerBaseFee": 200,
                "liquidityNum": round(rng.uniform(1_000, 50_000), 2),
                "volume24hr": round(rng.uniform(100, 20_000), 2),
                "active": True,
                "acceptingOrders": idx != len(EVENTS) - 1,
            }
        )
        books.append(_book_payload(rng, yes_token, yes_price, timestamp))
        books.append(_book_payload(rng, no_token, no_price, timestamp))
    return markets, books


def fetch_demo_snapshot(
    seed: Optional[int] = None,
    timestamp: int = 0,
    fees: Optional[Fees] = None,
) -> Tuple[List[Market], Dict[str, OrderBook]]:
    market_payloads, book_payloads = demo_payloads(seed, timestamp)
    markets = parse_markets(market_payloads, fees)
    books = {b.token_id: b for b in (parse_order_book(p) for p in book_payloads)}
    return markets, books
