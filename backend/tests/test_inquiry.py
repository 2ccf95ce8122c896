import pytest

from bond_desk.errors import UnknownInquiryError
from bond_desk.inquiry import InquiryService
from bond_desk.pipeline import Inquiry, InquiryState, Side


@pytest.fixture
def inquiries(recorder):
    service = InquiryService()
    service.subscribe(recorder)
    return service


def _inquiry(bond, state=InquiryState.RECEIVED, inquiry_id="INQ1"):
    return Inquiry(inquiry_id=inquiry_id, product=bond, side=Side.BUY,
                   quantity=1_000_000, price=99.5, state=state)


class TestInquiryLifecycle:
    """RECEIVED → QUOTED → DONE"""

    def test_received_is_quoted_then_done(self, inquiries, bond, recorder):
        inquiries.update(_inquiry(bond))
        assert inquiries.get_transitions("INQ1") == [
            InquiryState.RECEIVED, InquiryState.QUOTED, InquiryState.DONE,
        ]
        assert inquiries.get("INQ1").state == InquiryState.DONE
        assert len(recorder.records) == 1, "Exactly one notification per completed inquiry"
        assert recorder.records[0].state == InquiryState.DONE

    def test_quoted_ingest_completes_with_one_notification(self, inquiries, bond, recorder):
        inquiries.update(_inquiry(bond, InquiryState.QUOTED))
        assert inquiries.get("INQ1").state == InquiryState.DONE
        assert len(recorder.records) == 1
        assert inquiries.get_transitions("INQ1") == [InquiryState.DONE]

    @pytest.mark.parametrize("state", [
        InquiryState.DONE, InquiryState.REJECTED, InquiryState.CUSTOMER_REJECTED,
    ])
    def test_terminal_states_are_ignored(self, inquiries, bond, recorder, state):
        inquiries.update(_inquiry(bond, state))
        assert "INQ1" not in inquiries
        assert recorder.records == []
        assert inquiries.get_stats()["ignored"] == 1

    def test_keyed_by_inquiry_id(self, inquiries, bond):
        inquiries.update(_inquiry(bond, inquiry_id="A"))
        inquiries.update(_inquiry(bond, inquiry_id="B"))
        assert sorted(inquiries.keys()) == ["A", "B"]


class TestQuoteAndReject:
    """Operations on stored inquiries"""

    def test_send_quote_reprices_and_notifies(self, inquiries, bond, recorder):
        inquiries.update(_inquiry(bond))
        repriced = inquiries.send_quote("INQ1", 99.75)
        assert repriced.price == 99.75
        assert repriced.state == InquiryState.DONE, "State is left untouched"
        assert recorder.records[-1] is repriced
        assert len(recorder.records) == 2

    def test_reject_is_silent(self, inquiries, bond, recorder):
        inquiries.update(_inquiry(bond))
        inquiries.reject_inquiry("INQ1")
        assert inquiries.get("INQ1").state == InquiryState.REJECTED
        assert len(recorder.records) == 1

    def test_unknown_inquiry(self, inquiries):
        with pytest.raises(UnknownInquiryError):
            inquiries.send_quote("NOPE", 99.0)
        with pytest.raises(UnknownInquiryError):
            inquiries.reject_inquiry("NOPE")

    def test_stats_by_state(self, inquiries, bond):
        inquiries.update(_inquiry(bond, inquiry_id="A"))
        inquiries.update(_inquiry(bond, inquiry_id="B"))
        inquiries.reject_inquiry("B")
        stats = inquiries.get_stats()
        assert stats["by_state"] == {"DONE": 1, "REJECTED": 1}
        assert stats["quotes_published"] == 2
