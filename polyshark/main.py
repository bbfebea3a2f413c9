from __future__ import annotations

import os
from typing import Optional

from polyshark.config.settings import Settings
from polyshark.connectors.demo import fetch_demo_snapshot
from polyshark.core.arb import ArbitrageDetector
from polyshark.core.executor import PaperTrader
from polyshark.core.wallet import Wallet
from polyshark.utils.logging import get_logger


logger = get_logger("main")


def build_trader(cfg: Settings, wallet: Optional[Wallet] = None) -> PaperTrader:
    detector = ArbitrageDetector(
        min_spread=cfg.strategy.min_spread_threshold,
        min_profit=cfg.strategy.min_profit_usd,
        legs=cfg.strategy.fee_legs,
    )
    wallet = wallet or Wallet(cfg.paper.starting_balance)
    return PaperTrader(detector, wallet, cfg.strategy.order_size, cfg.strategy.max_price_impact)


def run_once(seed: Optional[int] = None, cfg: Optional[Settings] = None) -> int:
    """Run one paper scan cycle over demo snapshots and return the number of trades."""
    cfg = cfg or Settings.from_env()
    logger.info("PolyShark paper cycle (env=%s, seed=%s)", cfg.env, seed)
    markets, books = fetch_demo_snapshot(seed=seed, fees=cfg.fees)
    trader = build_trader(cfg)
    report = trader.run_cycle(markets, books)

    if not report.signals:
        logger.info("No opportunities found.")
        return 0

    wallet = trader.wallet
    marks = {token: book.midpoint() or 0.0 for token, book in books.items()}
    logger.info(
        "Found %d opportunities, executed %d | equity=%.2f pnl=%.2f fees=%.4f",
        len(report.signals),
        len(report.trades),
        wallet.equity(marks),
        wallet.pnl(marks),
        wallet.total_fees_paid,
    )
    return len(report.trades)


def cli():
    seed = os.environ.get("POLYSHARK_SEED")
    run_once(seed=int(seed) if seed else None)


if __name__ == "__main__":
    cli()
