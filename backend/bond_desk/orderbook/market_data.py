"""
Market Data Service
───────────────────
Keeps the latest order-book snapshot for each CUSIP and answers the two
questions the algos ask of it:

  • best bid/offer — highest bid and lowest offer in the snapshot
  • aggregated depth — one level per distinct price, quantities summed

Snapshots arrive whole from the feed (2 × book_depth orders per CUSIP);
there is no incremental level maintenance.
"""

import logging
from typing import Any, Dict, List

from ..config import MarketDataConfig
from ..errors import UnknownInstrumentError
from ..pipeline.event_types import BidOffer, Order, OrderBook, PricingSide
from ..pipeline.keyed_store import KeyedEventStore

logger = logging.getLogger(__name__)


def aggregate_orders(orders: List[Order], side: PricingSide) -> List[Order]:
    """Collapse orders sharing a price into one order with the summed quantity."""
    levels: Dict[float, int] = {}
    for order in orders:
        levels[order.price] = levels.get(order.price, 0) + order.quantity
    return [Order(price=p, quantity=q, side=side) for p, q in levels.items()]


class MarketDataService(KeyedEventStore[str, OrderBook]):

    def __init__(self, config: MarketDataConfig):
        super().__init__(name="MarketData")
        self.config = config

    @property
    def book_depth(self) -> int:
        return self.config.book_depth

    def _book(self, product_id: str) -> OrderBook:
        book = self.get(product_id)
        if book is None:
            raise UnknownInstrumentError(product_id, table="order books")
        return book

    def best_bid_offer(self, product_id: str) -> BidOffer:
        return self._book(product_id).bid_offer()

    def aggregate_depth(self, product_id: str) -> OrderBook:
        """
        Replace the stored stacks for `product_id` with price-aggregated
        ones and return a copy of the new book. Listeners are not notified.
        """
        book = self._book(product_id)
        aggregated = OrderBook(
            product=book.product,
            bid_stack=aggregate_orders(book.bid_stack, PricingSide.BID),
            offer_stack=aggregate_orders(book.offer_stack, PricingSide.OFFER),
        )
        self._store(aggregated)
        logger.debug(
            f"[MarketData] {product_id} depth aggregated: "
            f"{len(book.bid_stack)}→{len(aggregated.bid_stack)} bids, "
            f"{len(book.offer_stack)}→{len(aggregated.offer_stack)} offers"
        )
        return aggregated.copy()

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats["book_depth"] = self.book_depth
        stats["books"] = {
            pid: {
                "bid_levels": len(book.bid_stack),
                "offer_levels": len(book.offer_stack),
            }
            for pid, book in self._data.items()
        }
        return stats
