"""Core data models for binary prediction markets and their order books.

This module defines the value types the simulator works with: market price
snapshots, per-token order books, arbitrage signals and execution records.
Every type here is immutable; the only mutable state in the simulator is the
wallet ledger in ``polyshark.core.wallet``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from polyshark.config.constants import BALANCED_TOLERANCE, FILL_TOLERANCE, NO_INDEX, YES_INDEX

Side = Literal["BUY", "SELL"]

BUY: Side = "BUY"
SELL: Side = "SELL"


@dataclass(frozen=True)
class Market:
    """A binary market snapshot. Index 0 is YES and index 1 is NO."""
    id: str
    question: str
    outcomes: Tuple[str, ...]
    outcome_prices: Tuple[float, ...]
    slug: str = ""
    clob_token_ids: Tuple[str, ...] = ()
    best_bid: Optional[float] = None
    best_ask: Optional[float] = None
    maker_base_fee: int = 0  # bps
    taker_base_fee: int = 0  # bps, e.g. 200 = 2%
    liquidity: float = 0.0
    volume_24hr: float = 0.0
    active: bool = True
    accepting_orders: bool = True

    @property
    def yes_price(self) -> float:
        return self.outcome_prices[YES_INDEX]

    @property
    def no_price(self) -> float:
        return self.outcome_prices[NO_INDEX]

    @property
    def price_sum(self) -> float:
        return self.yes_price + self.no_price

    @property
    def is_tradable(self) -> bool:
        return self.active and self.accepting_orders

    def get_spread(self) -> float:
        """Absolute deviation of the YES+NO price sum from 1.0."""
        return abs(self.price_sum - 1.0)

    def is_balanced(self, tolerance: float = BALANCED_TOLERANCE) -> bool:
        return self.get_spread() <= tolerance

    def token_for(self, outcome_index: int) -> Optional[str]:
        if outcome_index < len(self.clob_token_ids):
            return self.clob_token_ids[outcome_index]
        return None


@dataclass(frozen=True)
class PriceLevel:
    """Represents a single resting level in the order book."""
    price: float
    size: float


@dataclass(frozen=True)
class OrderBook:
    """Order book snapshot for one token.

    Bids are expected best (highest) first and asks best (lowest) first. The
    book never sorts its levels; producers hand them over already ordered.
    """
    token_id: str
    bids: Tuple[PriceLevel, ...] = ()
    asks: Tuple[PriceLevel, ...] = ()
    timestamp: int = 0

    @property
    def best_bid(self) -> Optional[float]:
        return self.bids[0].price if self.bids else None

    @property
    def best_ask(self) -> Optional[float]:
        return self.asks[0].price if self.asks else None

    def midpoint(self) -> Optional[float]:
        if not self.bids or not self.asks:
            return None
        return (self.bids[0].price + self.asks[0].price) / 2.0

    def bid_ask_spread(self) -> Optional[float]:
        if not self.bids or not self.asks:
            return None
        return self.asks[0].price - self.bids[0].price

    def total_bid_liquidity(self) -> float:
        return sum(level.size for level in self.bids)

    def total_ask_liquidity(self) -> float:
        return sum(level.size for level in self.asks)

    def levels_for(self, side: Side) -> Tuple[PriceLevel, ...]:
        """Levels that provide liquidity to ``side``: asks fill a BUY, bids fill a SELL."""
        return self.asks if side == BUY else self.bids

    def execution_price(self, size: float, side: Side) -> Optional[float]:
        """Volume-weighted price for taking ``size`` against the book.

        Levels are consumed in their given order until the size is filled.
        Returns None when the book runs out first. ``size`` must be positive;
        a float leftover within ``FILL_TOLERANCE * size`` counts as filled.

        Example:
            asks = [PriceLevel(0.51, 400), PriceLevel(0.52, 700)]
            # BUY 600: 400 @ 0.51 + 200 @ 0.52 = 308.0 -> 0.51333 avg
        """
        remaining = size
        total_notional = 0.0

        for level in self.levels_for(side):
            if remaining <= 0:
                break
            fill_amount = min(remaining, level.size)
            total_notional += fill_amount * level.price
            remaining -= fill_amount

        if remaining > FILL_TOLERANCE * size:
            return None

        return total_notional / size


@dataclass(frozen=True)
class Trade:
    """An executed (simulated) trade."""
    id: str
    token_id: str
    price: float
    size: float
    side: Side
    timestamp: int


@dataclass(frozen=True)
class ArbitrageSignal:
    """A detected price-sum violation on a binary market."""
    market_id: str
    spread: float  # deviation of the price sum from 1.0
    edge: float  # gross profit per unit before costs
    recommended_side: Side
    yes_price: float
    no_price: float


@dataclass(frozen=True)
class ExecutionResult:
    filled_size: float
    execution_price: float
    fee_paid: float
    slippage: float  # fraction of midpoint, unsigned
    total_cost: float
    success: bool


@dataclass(frozen=True)
class TradeDecision:
    """Profitability verdict for one signal at one size."""
    signal: ArbitrageSignal
    size: float
    fee_rate: float
    slippage: float
    expected_profit: float
    should_trade: bool
