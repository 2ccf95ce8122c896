import pytest

from bond_desk import DeskConfig, DeskOrchestrator
from bond_desk.pipeline import Order, OrderBook, PricingSide, ServiceListener
from bond_desk.reference import ReferenceData


class RecordingListener(ServiceListener):
    """Keeps every record it is handed, in arrival order."""

    def __init__(self, name="recorder"):
        self.records = []
        self._name = name

    def process_add(self, data):
        self.records.append(data)

    @property
    def name(self):
        return self._name


@pytest.fixture
def reference_data():
    return ReferenceData.treasuries()


@pytest.fixture
def bond(reference_data):
    """The 2Y note."""
    return reference_data.get_bond_by_maturity(2)


@pytest.fixture
def config():
    return DeskConfig()


@pytest.fixture
def desk(config, reference_data):
    return DeskOrchestrator(config, reference_data).wire()


@pytest.fixture
def recorder():
    return RecordingListener()


@pytest.fixture
def make_book(bond):
    """Builds an OrderBook from (price, qty) pairs for each side."""

    def _make(bids, offers, product=None):
        return OrderBook(
            product=product or bond,
            bid_stack=[Order(p, q, PricingSide.BID) for p, q in bids],
            offer_stack=[Order(p, q, PricingSide.OFFER) for p, q in offers],
        )

    return _make
