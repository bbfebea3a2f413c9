"""Simulated balance sheet for paper trading.

The wallet holds USDC cash and at most one open position per token. Cash
never goes negative: every debit goes through ``deduct``, which refuses
amounts the wallet cannot cover and leaves the balance untouched.

A wallet is owned by exactly one simulation at a time; nothing here locks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from polyshark.core.models import BUY, Side
from polyshark.utils.logging import get_logger


logger = get_logger("wallet")


class PositionExistsError(RuntimeError):
    """Raised when opening a position on a token that already has one."""

    def __init__(self, token_id: str):
        super().__init__(f"position already open for token {token_id}")
        self.token_id = token_id


@dataclass
class Position:
    token_id: str
    side: Side
    size: float
    entry_price: float
    entry_time: int

    def pnl_at(self, exit_price: float) -> float:
        if self.side == BUY:
            return (exit_price - self.entry_price) * self.size
        return (self.entry_price - exit_price) * self.size


@dataclass
class Wallet:
    starting_balance: float
    usdc: float = field(init=False)
    positions: Dict[str, Position] = field(default_factory=dict)
    total_fees_paid: float = 0.0
    total_trades: int = 0
    winning_trades: int = 0

    def __post_init__(self) -> None:
        self.usdc = self.starting_balance

    def can_afford(self, amount: float) -> bool:
        return self.usdc >= amount

    def deduct(self, amount: float) -> bool:
        """Debit ``amount`` if affordable. Returns False and changes nothing otherwise."""
        if not self.can_afford(amount):
            logger.debug("Rejected debit of %.4f with balance %.4f", amount, self.usdc)
            return False
        self.usdc -= amount
        return True

    def credit(self, amount: float) -> None:
        self.usdc += amount

    def record_fee(self, fee: float) -> None:
        self.total_fees_paid += fee

    def record_trade(self, is_winner: bool) -> None:
        self.total_trades += 1
        if is_winner:
            self.winning_trades += 1

    def equity(self, current_prices: Mapping[str, float]) -> float:
        """Cash plus positions marked at ``current_prices``; unpriced tokens count as 0."""
        position_value = sum(
            pos.size * current_prices.get(token_id, 0.0)
            for token_id, pos in self.positions.items()
        )
        return self.usdc + position_value

    def pnl(self, current_prices: Mapping[str, float]) -> float:
        return self.equity(current_prices) - self.starting_balance

    def win_rate(self) -> float:
        if self.total_trades == 0:
            return 0.0
        return self.winning_trades / self.total_trades

    def has_position(self, token_id: str) -> bool:
        return token_id in self.positions

    def open_position(
        self,
        token_id: str,
        side: Side,
        size: float,
        price: float,
        timestamp: int,
        replace: bool = False,
    ) -> Position:
        """Open a position on ``token_id``.

        Raises:
            PositionExistsError: If a position is already open and ``replace`` is False.
                With ``replace=True`` the previous position is discarded without
                being settled.
        """
        if token_id in self.positions and not replace:
            raise PositionExistsError(token_id)
        position = Position(
            token_id=token_id,
            side=side,
            size=size,
            entry_price=price,
            entry_time=timestamp,
        )
        self.positions[token_id] = position
        return position

    def close_position(self, token_id: str, exit_price: float) -> Optional[float]:
        """Close the position on ``token_id`` and credit ``size * exit_price``.

        Returns the realized PnL, or None when no position is open for the token.
        """
        pos = self.positions.pop(token_id, None)
        if pos is None:
            return None
        pnl = pos.pnl_at(exit_price)
        self.credit(pos.size * exit_price)
        logger.info("Closed %s %s x%.2f @ %.4f, pnl=%.4f", pos.side, token_id, pos.size, exit_price, pnl)
        return pnl
