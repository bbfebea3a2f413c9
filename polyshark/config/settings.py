from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from polyshark.config.constants import (
    DEFAULT_FEE_LEGS,
    DEFAULT_MAKER_FEE_BPS,
    DEFAULT_MIN_SPREAD,
    DEFAULT_TAKER_FEE_BPS,
)


@dataclass
class Fees:
    maker_bps: int = DEFAULT_MAKER_FEE_BPS
    taker_bps: int = DEFAULT_TAKER_FEE_BPS  # used when a market carries no fee fields


@dataclass
class Strategy:
    min_spread_threshold: float = DEFAULT_MIN_SPREAD
    min_profit_usd: float = 0.5
    order_size: float = 100.0
    fee_legs: int = DEFAULT_FEE_LEGS
    max_price_impact: Optional[float] = 0.05  # None disables depth capping


@dataclass
class Paper:
    starting_balance: float = 1000.0


@dataclass
class Settings:
    fees: Fees = field(default_factory=Fees)
    strategy: Strategy = field(default_factory=Strategy)
    paper: Paper = field(default_factory=Paper)
    env: str = "dev"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings with ``POLYSHARK_*`` environment overrides applied."""
        s = cls()
        env = os.environ
        s.env = env.get("POLYSHARK_ENV", s.env)
        s.fees.maker_bps = int(env.get("POLYSHARK_MAKER_FEE_BPS", s.fees.maker_bps))
        s.fees.taker_bps = int(env.get("POLYSHARK_TAKER_FEE_BPS", s.fees.taker_bps))
        s.strategy.min_spread_threshold = float(
            env.get("POLYSHARK_MIN_SPREAD", s.strategy.min_spread_threshold)
        )
        s.strategy.min_profit_usd = float(env.get("POLYSHARK_MIN_PROFIT", s.strategy.min_profit_usd))
        s.strategy.order_size = float(env.get("POLYSHARK_ORDER_SIZE", s.strategy.order_size))
        s.strategy.fee_legs = int(env.get("POLYSHARK_FEE_LEGS", s.strategy.fee_legs))
        if "POLYSHARK_MAX_PRICE_IMPACT" in env:
            raw = env["POLYSHARK_MAX_PRICE_IMPACT"]
            s.strategy.max_price_impact = float(raw) if raw.lower() != "none" else None
        s.paper.starting_balance = float(
            env.get("POLYSHARK_STARTING_BALANCE", s.paper.starting_balance)
        )
        return s


settings = Settings()
