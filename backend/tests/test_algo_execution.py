import pytest

from bond_desk.config import AlgoExecutionConfig
from bond_desk.pipeline import OrderType, PricingSide
from bond_desk.strategy import AlgoExecutionService


TIGHT = ([(100.0, 1_000_000)], [(100.0078125, 2_000_000)])
WIDE = ([(100.0, 1_000_000)], [(100.015625, 2_000_000)])


@pytest.fixture
def algo():
    return AlgoExecutionService(AlgoExecutionConfig())


class TestSpreadCrossing:
    """Threshold rule"""

    def test_spread_at_threshold_emits(self, algo, make_book, recorder):
        algo.subscribe(recorder)
        decision = algo.execute_on_book(make_book(*TIGHT))
        assert decision is not None
        assert recorder.records == [decision]

    def test_spread_above_threshold_emits_nothing(self, algo, make_book, recorder):
        algo.subscribe(recorder)
        assert algo.execute_on_book(make_book(*WIDE)) is None
        assert recorder.records == []
        assert algo.execution_count == 0

    def test_one_sided_book_is_skipped(self, algo, make_book):
        assert algo.execute_on_book(make_book([(100.0, 1)], [])) is None

    def test_order_fields(self, algo, make_book, bond):
        order = algo.execute_on_book(make_book(*TIGHT)).execution_order
        assert order.product == bond
        assert order.side == PricingSide.OFFER
        assert order.order_id == "AlgoExec1"
        assert order.order_type == OrderType.MARKET
        assert order.price == 100.0078125
        assert order.visible_quantity == 2_000_000
        assert order.hidden_quantity == 0
        assert order.parent_order_id == "PARENT_ORDER_ID"
        assert order.is_child_order is False

    def test_stored_under_product(self, algo, make_book, bond):
        decision = algo.execute_on_book(make_book(*TIGHT))
        assert algo.get(bond.product_id) is decision


class TestSideAlternation:
    """OFFER, BID, OFFER across qualifying books"""

    def test_alternates_starting_with_offer(self, algo, make_book):
        sides = [algo.execute_on_book(make_book(*TIGHT)).execution_order.side for _ in range(3)]
        assert sides == [PricingSide.OFFER, PricingSide.BID, PricingSide.OFFER]

    def test_bid_side_uses_bid_level(self, algo, make_book):
        algo.execute_on_book(make_book(*TIGHT))
        order = algo.execute_on_book(make_book(*TIGHT)).execution_order
        assert order.price == 100.0
        assert order.visible_quantity == 1_000_000
        assert order.order_id == "AlgoExec2"

    def test_wide_books_do_not_advance_counter(self, algo, make_book):
        algo.execute_on_book(make_book(*TIGHT))
        algo.execute_on_book(make_book(*WIDE))
        algo.execute_on_book(make_book(*WIDE))
        assert algo.execute_on_book(make_book(*TIGHT)).execution_order.side == PricingSide.BID
        stats = algo.get_stats()
        assert stats["execution_count"] == 2
        assert stats["books_too_wide"] == 2

    def test_order_type_from_config(self, make_book):
        algo = AlgoExecutionService(AlgoExecutionConfig(order_type=OrderType.IOC))
        assert algo.execute_on_book(make_book(*TIGHT)).execution_order.order_type == OrderType.IOC
