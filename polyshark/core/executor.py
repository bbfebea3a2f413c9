from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from polyshark.config.constants import YES_INDEX
from polyshark.core import fills
from polyshark.core.arb import ArbitrageDetector
from polyshark.core.fees import FeeModel
from polyshark.core.models import (
    ArbitrageSignal,
    ExecutionResult,
    Market,
    OrderBook,
    Side,
    Trade,
    TradeDecision,
)
from polyshark.core.slippage import calculate_slippage, max_size_for_price_impact
from polyshark.core.wallet import Wallet
from polyshark.utils.logging import get_logger


logger = get_logger("executor")


class ExecutionEngine:
    """Simulates taker orders against an order book snapshot and a wallet."""

    def __init__(self, fee_model: FeeModel):
        self.fee_model = fee_model

    def execute(self, book: OrderBook, size: float, side: Side, wallet: Wallet) -> Optional[ExecutionResult]:
        """Fill as much of ``size`` as the book allows and debit the wallet.

        Returns None, leaving the wallet untouched, when nothing can fill, when
        the book has no midpoint, or when the wallet cannot cover notional plus
        fee. There is no partial-success path below the fill model's size.
        """
        filled = fills.filled_size(book, size, side)
        if filled <= 0:
            logger.debug("%s: no %s liquidity for size %.2f", book.token_id, side, size)
            return None

        exec_price = book.execution_price(filled, side)
        midpoint = book.midpoint()
        if exec_price is None or midpoint is None:
            logger.debug("%s: book cannot price %s %.2f", book.token_id, side, filled)
            return None
        slippage = abs((exec_price - midpoint) / midpoint)

        notional = exec_price * filled
        fee = self.fee_model.calculate(notional, is_maker=False)
        total_cost = notional + fee

        if not wallet.deduct(total_cost):
            logger.info(
                "%s: insufficient funds for %s %.2f (cost=%.4f, balance=%.4f)",
                book.token_id,
                side,
                filled,
                total_cost,
                wallet.usdc,
            )
            return None
        wallet.record_fee(fee)

        logger.info(
            "Filled %s %s %.2f @ %.4f (slippage=%.4f, fee=%.4f, cost=%.4f)",
            side,
            book.token_id,
            filled,
            exec_price,
            slippage,
            fee,
            total_cost,
        )
        return ExecutionResult(
            filled_size=filled,
            execution_price=exec_price,
            fee_paid=fee,
            slippage=slippage,
            total_cost=total_cost,
            success=True,
        )


@dataclass
class CycleReport:
    """Everything one paper scan cycle saw and did."""
    signals: List[ArbitrageSignal] = field(default_factory=list)
    decisions: List[TradeDecision] = field(default_factory=list)
    results: List[ExecutionResult] = field(default_factory=list)
    trades: List[Trade] = field(default_factory=list)


class PaperTrader:
    """Runs detector, profitability gate and execution engine over one snapshot.

    Each signal is traded on the market's YES token in the recommended
    direction. Tokens that already carry an open position are skipped. With
    ``max_price_impact`` set, the order is capped to the depth within that
    move from the best price.
    """

    def __init__(
        self,
        detector: ArbitrageDetector,
        wallet: Wallet,
        order_size: float,
        max_price_impact: Optional[float] = None,
    ):
        self.detector = detector
        self.wallet = wallet
        self.order_size = order_size
        self.max_price_impact = max_price_impact

    def _size_for(self, book: OrderBook, side: Side) -> float:
        if self.max_price_impact is None:
            return self.order_size
        depth = max_size_for_price_impact(book.levels_for(side), side, self.max_price_impact)
        return min(self.order_size, depth)

    def run_cycle(
        self,
        markets: Iterable[Market],
        books: Mapping[str, OrderBook],
        timestamp: Optional[int] = None,
    ) -> CycleReport:
        markets = list(markets)
        ts = int(time.time()) if timestamp is None else timestamp
        by_id: Dict[str, Market] = {m.id: m for m in markets}
        report = CycleReport(signals=self.detector.scan(markets))

        for signal in report.signals:
            market = by_id[signal.market_id]
            token_id = market.token_for(YES_INDEX)
            book = books.get(token_id) if token_id else None
            if book is None:
                logger.debug("%s: no order book for YES token", market.id)
                continue
            if self.wallet.has_position(book.token_id):
                logger.debug("%s: position already open, skipping", book.token_id)
                continue

            side = signal.recommended_side
            size = self._size_for(book, side)
            slippage = calculate_slippage(book, size, side) if size > 0 else None
            if slippage is None:
                logger.debug("%s: insufficient liquidity for %.2f", book.token_id, size)
                continue

            fee_model = FeeModel.from_market(market)
            decision = self.detector.evaluate(signal, size, fee_model.taker_rate, slippage)
            report.decisions.append(decision)
            if not decision.should_trade:
                continue

            result = ExecutionEngine(fee_model).execute(book, size, side, self.wallet)
            if result is None:
                continue
            report.results.append(result)

            self.wallet.open_position(book.token_id, side, result.filled_size, result.execution_price, ts)
            report.trades.append(
                Trade(
                    id=uuid.uuid4().hex,
                    token_id=book.token_id,
                    price=result.execution_price,
                    size=result.filled_size,
                    side=side,
                    timestamp=ts,
                )
            )

        logger.info(
            "Cycle: %d markets, %d signals, %d trades, balance=%.2f",
            len(markets),
            len(report.signals),
            len(report.trades),
            self.wallet.usdc,
        )
        return report
