"""Slippage estimation from order book depth.

Slippage is measured against the book midpoint and reported so that a
positive number is always a cost to the trader: a BUY that walks up the asks
and a SELL that walks down the bids both come out positive.
"""

from typing import Optional, Sequence

from polyshark.core.models import BUY, OrderBook, PriceLevel, Side


def calculate_slippage(book: OrderBook, size: float, side: Side) -> Optional[float]:
    """Signed slippage of taking ``size`` as a fraction of the midpoint.

    Returns None if either side of the book is empty or the walked side cannot
    fill ``size``.

    Example:
        bids = [(0.49, 500)], asks = [(0.51, 400), (0.52, 700)]
        BUY 600 -> vwap 0.51333, mid 0.50 -> 0.02667
    """
    midpoint = book.midpoint()
    if midpoint is None:
        return None
    exec_price = book.execution_price(size, side)
    if exec_price is None:
        return None

    if side == BUY:
        return (exec_price - midpoint) / midpoint
    return (midpoint - exec_price) / midpoint


def execution_cost(book: OrderBook, size: float, side: Side) -> Optional[float]:
    """Notional paid (or received) for ``size`` at the walked price."""
    exec_price = book.execution_price(size, side)
    if exec_price is None:
        return None
    return exec_price * size


def max_size_for_price_impact(levels: Sequence[PriceLevel], side: Side, max_price_impact: float = 0.01) -> float:
    """Depth available without moving price more than ``max_price_impact``.

    Args:
        levels: Levels on the side being taken, best first
        side: BUY walks up the asks, SELL walks down the bids
        max_price_impact: Maximum acceptable move from the best price (default: 1%)

    Example:
        Best ask $0.50 and 1% impact: every ask up to $0.505 counts.
    """
    if not levels:
        return 0.0

    best_price = levels[0].price
    if side == BUY:
        limit = best_price * (1 + max_price_impact)
    else:
        limit = best_price * (1 - max_price_impact)

    total_size = 0.0
    for level in levels:
        if side == BUY and level.price > limit:
            break
        if side != BUY and level.price < limit:
            break
        total_size += level.size

    return total_size
