import pytest

from polyshark.core.fees import FeeModel
from polyshark.core.fills import available_liquidity, estimate_fill_ratio, filled_size
from polyshark.core.models import BUY, SELL
from polyshark.core.slippage import calculate_slippage, execution_cost, max_size_for_price_impact
from tests.factories import make_book, make_market


def test_fee_uses_maker_or_taker_rate():
    fees = FeeModel(maker_fee_bps=0, taker_fee_bps=200)
    assert fees.calculate(100.0, is_maker=True) == 0.0
    assert fees.calculate(100.0, is_maker=False) == pytest.approx(2.0)
    assert fees.taker_rate == pytest.approx(0.02)
    assert fees.maker_rate == 0.0


@pytest.mark.parametrize("notional", [1.0, 37.5, 1234.56])
@pytest.mark.parametrize("is_maker", [True, False])
def test_fee_is_linear_in_notional(notional, is_maker):
    fees = FeeModel(maker_fee_bps=15, taker_fee_bps=200)
    assert fees.calculate(2 * notional, is_maker) == pytest.approx(2 * fees.calculate(notional, is_maker))


def test_fee_model_from_market():
    fees = FeeModel.from_market(make_market(taker_bps=150))
    assert fees.maker_fee_bps == 0
    assert fees.taker_fee_bps == 150


def test_full_fill_when_liquidity_suffices(scenario_book):
    assert estimate_fill_ratio(scenario_book, 600, BUY) == 1.0
    assert filled_size(scenario_book, 600, BUY) == 600
    assert filled_size(scenario_book, 500, SELL) == 500


def test_partial_fill_is_pro_rata(scenario_book):
    assert estimate_fill_ratio(scenario_book, 2200, BUY) == pytest.approx(0.5)
    assert filled_size(scenario_book, 2200, BUY) == pytest.approx(1100)
    assert filled_size(scenario_book, 1000, SELL) == pytest.approx(500)


def test_fill_on_empty_book_is_zero():
    book = make_book()
    assert available_liquidity(book, BUY) == 0
    assert estimate_fill_ratio(book, 100, SELL) == 0.0
    assert filled_size(book, 100, BUY) == 0.0


def test_buy_slippage_scenario(scenario_book):
    slippage = calculate_slippage(scenario_book, 600, BUY)
    vwap = (400 * 0.51 + 200 * 0.52) / 600
    assert slippage == pytest.approx((vwap - 0.50) / 0.50)
    assert slippage == pytest.approx(0.02667, abs=1e-5)


def test_sell_slippage_is_positive_cost(scenario_book):
    assert calculate_slippage(scenario_book, 200, SELL) == pytest.approx(0.02)


def test_slippage_none_without_midpoint_or_depth(scenario_book):
    assert calculate_slippage(make_book(asks=[(0.51, 100)]), 10, BUY) is None
    assert calculate_slippage(scenario_book, 5000, BUY) is None


def test_execution_cost(scenario_book):
    assert execution_cost(scenario_book, 600, BUY) == pytest.approx(308.0)
    assert execution_cost(scenario_book, 600, SELL) is None


def test_max_size_for_price_impact():
    book = make_book(
        bids=[(0.50, 100), (0.496, 50), (0.48, 200)],
        asks=[(0.50, 100), (0.504, 50), (0.52, 200)],
    )
    assert max_size_for_price_impact(book.asks, BUY, 0.01) == 150
    assert max_size_for_price_impact(book.bids, SELL, 0.01) == 150
    assert max_size_for_price_impact((), BUY) == 0.0


@pytest.mark.parametrize("requested", [7, 187, 1000.3])
def test_partial_fill_equals_available_depth(requested):
    book = make_book(asks=[(0.51, 1), (0.52, 2)])
    assert filled_size(book, requested, BUY) == 3
