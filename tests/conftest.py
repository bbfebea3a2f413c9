import pytest

from tests.factories import make_book


@pytest.fixture
def scenario_book():
    return make_book(bids=[(0.49, 500)], asks=[(0.51, 400), (0.52, 700)])
