import pytest

from bond_desk.pipeline import (
    DISPLAY_ENUMS, DISPLAY_NAMES, PV01, ExecutionOrder, Inquiry, InquiryState, OrderType,
    Price, PriceStream, PriceStreamOrder, PricingSide, Side, Trade, display_name,
)


class TestDisplayNames:
    """Enum display table"""

    def test_every_member_has_a_display_name(self):
        for enum_cls in DISPLAY_ENUMS:
            for member in enum_cls:
                assert member in DISPLAY_NAMES, f"{enum_cls.__name__}.{member.name} missing"

    def test_missing_member_raises(self):
        with pytest.raises(KeyError):
            display_name("not-an-enum")


class TestRecordFields:
    """Display rows and persist keys"""

    def test_execution_order(self, bond):
        order = ExecutionOrder(bond, PricingSide.OFFER, "AlgoExec1", OrderType.MARKET,
                               99.515625, 100, 0, "PARENT_ORDER_ID")
        assert order.persist_key == bond.product_id
        assert order.to_fields() == [
            bond.product_id, "OFFER", "AlgoExec1", "MARKET", "99-16+", "100", "0",
            "PARENT_ORDER_ID", "NO",
        ]

    def test_price_stream(self, bond):
        stream = PriceStream(
            bond,
            PriceStreamOrder(99.5, 1, 2, PricingSide.BID),
            PriceStreamOrder(99.53125, 1, 2, PricingSide.OFFER),
        )
        assert stream.to_fields() == [
            bond.product_id, "99-160", "1", "2", "BID", "99-170", "1", "2", "OFFER",
        ]

    def test_price(self, bond):
        assert Price(bond, 99.5, 1 / 128).to_fields() == [bond.product_id, "99-160", "0-002"]

    def test_trade_keyed_by_trade_id(self, bond):
        trade = Trade(bond, "T42", 100.0, "TRSY1", 5, Side.SELL)
        assert trade.persist_key == "T42"
        assert trade.to_fields() == [bond.product_id, "T42", "100-000", "TRSY1", "5", "SELL"]

    def test_inquiry_keyed_by_inquiry_id(self, bond):
        inquiry = Inquiry("INQ9", bond, Side.BUY, 10, 100.0, InquiryState.QUOTED)
        assert inquiry.persist_key == "INQ9"
        assert inquiry.to_fields() == ["INQ9", bond.product_id, "BUY", "10", "100-000", "QUOTED"]

    def test_pv01(self, bond):
        assert PV01(bond, 0.5, 4).to_fields() == [bond.product_id, "0.500000", "4", "2.000000"]

    def test_crossed_price_renders_signed_spread(self, bond):
        assert Price(bond, 99.5, -4 / 256).to_fields() == [bond.product_id, "99-160", "-0-00+"]
