"""Arbitrage detection and the pre-trade profitability gate.

Detection is a threshold rule over each market's price sum (see
``ConstraintChecker``). Whether a detected signal is worth trading depends on
what survives after fees and slippage:

    net = edge * size - size * yes_price * fee_rate * legs - size * slippage

``legs`` is the number of fee-paying legs in the trade. The default of two
models a binary arbitrage as a pair of offsetting trades, both charged at the
YES price.
"""

from __future__ import annotations

from typing import Iterable, List

from polyshark.config.constants import DEFAULT_FEE_LEGS, DEFAULT_MIN_SPREAD
from polyshark.core.constraint import ConstraintChecker
from polyshark.core.models import ArbitrageSignal, Market, TradeDecision
from polyshark.utils.logging import get_logger


logger = get_logger("arb")


class ArbitrageDetector:
    def __init__(
        self,
        min_spread: float = DEFAULT_MIN_SPREAD,
        min_profit: float = 0.0,
        legs: int = DEFAULT_FEE_LEGS,
    ):
        self.constraint_checker = ConstraintChecker(min_spread)
        self.min_profit_threshold = min_profit
        self.legs = legs

    def scan(self, markets: Iterable[Market]) -> List[ArbitrageSignal]:
        """Signals for every tradable market that violates the constraint, in input order."""
        signals: List[ArbitrageSignal] = []
        scanned = 0
        for market in markets:
            if not market.is_tradable:
                continue
            scanned += 1
            signal = self.constraint_checker.check_violation(market)
            if signal is not None:
                signals.append(signal)
        logger.debug("Scanned %d tradable markets, %d signals", scanned, len(signals))
        return signals

    def expected_profit(
        self,
        signal: ArbitrageSignal,
        size: float,
        fee_rate: float,
        slippage: float,
    ) -> float:
        gross = signal.edge * size
        fee_cost = size * signal.yes_price * fee_rate * self.legs
        slippage_cost = size * slippage
        return gross - fee_cost - slippage_cost

    def should_trade(
        self,
        signal: ArbitrageSignal,
        size: float,
        fee_rate: float,
        slippage: float,
    ) -> bool:
        # Strict: a profit equal to the threshold is not enough
        return self.expected_profit(signal, size, fee_rate, slippage) > self.min_profit_threshold

    def evaluate(
        self,
        signal: ArbitrageSignal,
        size: float,
        fee_rate: float,
        slippage: float,
    ) -> TradeDecision:
        profit = self.expected_profit(signal, size, fee_rate, slippage)
        decision = TradeDecision(
            signal=signal,
            size=size,
            fee_rate=fee_rate,
            slippage=slippage,
            expected_profit=profit,
            should_trade=profit > self.min_profit_threshold,
        )
        logger.debug(
            "%s: edge=%.4f size=%.2f expected=$%.4f trade=%s",
            signal.market_id,
            signal.edge,
            size,
            profit,
            decision.should_trade,
        )
        return decision
