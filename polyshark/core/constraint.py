from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from polyshark.config.constants import DEFAULT_MIN_SPREAD
from polyshark.core.models import BUY, SELL, ArbitrageSignal, Market
from polyshark.utils.logging import get_logger


logger = get_logger("constraint")


@dataclass(frozen=True)
class ConstraintChecker:
    """Flags binary markets whose YES+NO prices drift away from 1.0."""

    min_spread_threshold: float = DEFAULT_MIN_SPREAD  # e.g. 0.02 for 2%

    def check_violation(self, market: Market) -> Optional[ArbitrageSignal]:
        spread = market.get_spread()
        if spread <= self.min_spread_threshold:
            logger.debug("%s within threshold: spread=%.4f", market.id, spread)
            return None

        # Overpriced outcomes converge down, underpriced converge up
        recommended_side = SELL if market.price_sum > 1.0 else BUY

        return ArbitrageSignal(
            market_id=market.id,
            spread=spread,
            edge=spread,
            recommended_side=recommended_side,
            yes_price=market.yes_price,
            no_price=market.no_price,
        )
