"""
Trade Booking Service
─────────────────────
Books trades keyed by trade id. Trades arrive two ways:

  • from the trade feed, already fully formed
  • from executed algo orders, via TradeBookingServiceListener

An executed order becomes a trade on the opposite side of the algo's
quoted side (our BID was hit → we SELL; our OFFER was lifted → we BUY),
for visible + hidden quantity, booked round-robin across the desk books.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, List

from ..config import BookingConfig
from ..pipeline.event_types import ExecutionOrder, PricingSide, Side, Trade
from ..pipeline.keyed_store import KeyedEventStore, ServiceListener

logger = logging.getLogger(__name__)

EXECUTION_TO_TRADE_SIDE: Dict[PricingSide, Side] = {
    PricingSide.BID: Side.SELL,
    PricingSide.OFFER: Side.BUY,
}


class TradeBookingService(KeyedEventStore[str, Trade]):

    def __init__(self, config: BookingConfig):
        super().__init__(name="TradeBooking")
        self.config = config
        self._quantity_by_book: Dict[str, int] = defaultdict(int)
        self.listener = TradeBookingServiceListener(self, config.books)

    def book_trade(self, trade: Trade) -> None:
        self._quantity_by_book[trade.book] += trade.quantity
        logger.debug(
            f"[Booking] {trade.trade_id} {trade.side.value} {trade.quantity} "
            f"{trade.product.product_id} in {trade.book}"
        )
        self.update(trade)

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats["quantity_by_book"] = dict(self._quantity_by_book)
        stats["orders_booked"] = self.listener.booked_count
        return stats


class TradeBookingServiceListener(ServiceListener[ExecutionOrder]):
    """Execution → trade booking."""

    def __init__(self, service: TradeBookingService, books: List[str]):
        self.service = service
        self.downstream = service
        self.books = list(books)
        self.booked_count = 0

    def next_book(self) -> str:
        self.booked_count += 1
        return self.books[self.booked_count % len(self.books)]

    def process_add(self, data: ExecutionOrder) -> None:
        trade = Trade(
            product=data.product,
            trade_id=data.order_id,
            price=data.price,
            book=self.next_book(),
            quantity=data.total_quantity,
            side=EXECUTION_TO_TRADE_SIDE[data.side],
        )
        self.service.book_trade(trade)
