"""Fill-rate estimation from resting order book liquidity.

An order can only fill against the side that provides liquidity to it: asks
fill a BUY, bids fill a SELL. When that side is thinner than the request the
order fills pro rata to what is available.
"""

from __future__ import annotations

from polyshark.core.models import BUY, OrderBook, Side


def available_liquidity(book: OrderBook, side: Side) -> float:
    if side == BUY:
        return book.total_ask_liquidity()
    return book.total_bid_liquidity()


def estimate_fill_ratio(book: OrderBook, size: float, side: Side) -> float:
    """Fraction of ``size`` the book can absorb, in [0, 1].

    Example:
        asks total 300 shares, BUY 600 -> 0.5
    """
    available = available_liquidity(book, side)
    if available >= size:
        return 1.0
    return available / size


def filled_size(book: OrderBook, requested_size: float, side: Side) -> float:
    """Requested size capped at the available depth.

    Equal to ``requested_size * estimate_fill_ratio(...)``, but returns the
    depth itself on a partial fill so the book can always walk the result.
    """
    return min(requested_size, available_liquidity(book, side))
