"""Basis-point fee schedule with separate maker and taker rates."""

from __future__ import annotations

from dataclasses import dataclass

from polyshark.config.constants import BPS_DENOMINATOR
from polyshark.core.models import Market


@dataclass(frozen=True)
class FeeModel:
    maker_fee_bps: int = 0  # usually 0
    taker_fee_bps: int = 0  # usually ~200

    @classmethod
    def from_market(cls, market: Market) -> "FeeModel":
        return cls(maker_fee_bps=market.maker_base_fee, taker_fee_bps=market.taker_base_fee)

    def calculate(self, notional: float, is_maker: bool) -> float:
        """Fee owed on ``notional``; linear in notional."""
        bps = self.maker_fee_bps if is_maker else self.taker_fee_bps
        return notional * (bps / BPS_DENOMINATOR)

    @property
    def taker_rate(self) -> float:
        return self.taker_fee_bps / BPS_DENOMINATOR

    @property
    def maker_rate(self) -> float:
        return self.maker_fee_bps / BPS_DENOMINATOR
