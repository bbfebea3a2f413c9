import pytest

from polyshark.connectors.demo import demo_payloads, fetch_demo_snapshot
from polyshark.connectors.snapshots import parse_market, parse_markets, parse_order_book
from polyshark.utils.validation import ValidationError


GAMMA_MARKET = {
    "id": "516710",
    "question": "Will the Fed cut rates in December?",
    "slug": "fed-cut-december",
    "outcomes": '["Yes", "No"]',
    "outcomePrices": '["0.48", "0.47"]',
    "clobTokenIds": '["111", "222"]',
    "bestBid": "0.47",
    "bestAsk": 0.49,
    "makerBaseFee": 0,
    "takerBaseFee": 200,
    "liquidityNum": 15234.5,
    "volume24hr": 812.0,
    "active": True,
    "acceptingOrders": True,
}


def test_parse_gamma_market():
    market = parse_market(GAMMA_MARKET)
    assert market.id == "516710"
    assert market.outcomes == ("Yes", "No")
    assert market.outcome_prices == (0.48, 0.47)
    assert market.clob_token_ids == ("111", "222")
    assert market.best_bid == 0.47
    assert market.taker_base_fee == 200
    assert market.liquidity == 15234.5
    assert market.is_tradable
    assert market.get_spread() == pytest.approx(0.05)


def test_parse_market_defaults_missing_fees():
    payload = {k: v for k, v in GAMMA_MARKET.items() if k not in ("makerBaseFee", "takerBaseFee")}
    market = parse_market(payload)
    assert market.maker_base_fee == 0
    assert market.taker_base_fee == 200


@pytest.mark.parametrize(
    "override",
    [
        {"id": "  "},
        {"outcomePrices": '["0.48"]'},
        {"outcomes": '["Yes"]', "outcomePrices": '["1.0"]'},
        {"outcomePrices": '["1.48", "0.47"]'},
        {"outcomePrices": '["abc", "0.47"]'},
        {"takerBaseFee": -5},
    ],
)
def test_parse_market_rejects_malformed(override):
    with pytest.raises(ValidationError):
        parse_market({**GAMMA_MARKET, **override})


def test_parse_markets_skips_invalid():
    markets = parse_markets([GAMMA_MARKET, {**GAMMA_MARKET, "id": ""}])
    assert [m.id for m in markets] == ["516710"]


def test_parse_order_book_sorts_levels():
    book = parse_order_book(
        {
            "asset_id": "111",
            "bids": [{"price": "0.45", "size": "10"}, {"price": "0.47", "size": "25"}],
            "asks": [{"price": "0.52", "size": "40"}, {"price": "0.49", "size": "15"}],
            "timestamp": "1700000000123",
        }
    )
    assert [lv.price for lv in book.bids] == [0.47, 0.45]
    assert [lv.price for lv in book.asks] == [0.49, 0.52]
    assert book.timestamp == 1700000000123
    assert book.midpoint() == pytest.approx(0.48)


def test_parse_order_book_rejects_negative_size():
    with pytest.raises(ValidationError):
        parse_order_book({"asset_id": "1", "bids": [["0.4", "-1"]], "asks": []})


def test_demo_snapshot_is_reproducible():
    assert demo_payloads(seed=3) == demo_payloads(seed=3)
    markets, books = fetch_demo_snapshot(seed=3)
    assert len(markets) == 4
    for market in markets:
        yes_book = books[market.token_for(0)]
        assert list(yes_book.bids) == sorted(yes_book.bids, key=lambda lv: lv.price, reverse=True)
        assert list(yes_book.asks) == sorted(yes_book.asks, key=lambda lv: lv.price)


def test_fee_defaults_follow_env_settings(monkeypatch):
    from polyshark.config.settings import Settings

    monkeypatch.setenv("POLYSHARK_TAKER_FEE_BPS", "50")
    monkeypatch.setenv("POLYSHARK_MAKER_FEE_BPS", "5")
    cfg = Settings.from_env()
    payload = {k: v for k, v in GAMMA_MARKET.items() if k not in ("makerBaseFee", "takerBaseFee")}

    market = parse_market(payload, cfg.fees)
    assert (market.maker_base_fee, market.taker_base_fee) == (5, 50)
    assert parse_markets([payload], cfg.fees)[0].taker_base_fee == 50
    # explicit payload fees still win
    assert parse_market(GAMMA_MARKET, cfg.fees).taker_base_fee == 200
