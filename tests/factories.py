from polyshark.core.models import Market, OrderBook, PriceLevel


def make_market(market_id="m1", prices=(0.5, 0.5), active=True, accepting=True, taker_bps=200, tokens=None):
    return Market(
        id=market_id,
        question=f"Question {market_id}?",
        outcomes=("Yes", "No"),
        outcome_prices=tuple(prices),
        clob_token_ids=tuple(tokens) if tokens is not None else (f"{market_id}-yes", f"{market_id}-no"),
        maker_base_fee=0,
        taker_base_fee=taker_bps,
        active=active,
        accepting_orders=accepting,
    )


def make_book(token_id="tok", bids=(), asks=()):
    return OrderBook(
        token_id=token_id,
        bids=tuple(PriceLevel(p, s) for p, s in bids),
        asks=tuple(PriceLevel(p, s) for p, s in asks),
        timestamp=1700000000,
    )

