"""
Algo Execution Engine
─────────────────────
Watches every order-book snapshot and crosses the spread when it is
tight enough to be cheap to cross.

Decision rule per snapshot:
  1. best bid / best offer from the book
  2. act only if offer − bid ≤ spread_threshold (1/128 by default)
  3. alternate sides: even decision count → lift the offer,
     odd → hit the bid
  4. emit a MARKET order for the full displayed size at that level

The count advances only when an order is emitted, so wide books do not
disturb the alternation.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..config import AlgoExecutionConfig
from ..pipeline.event_types import ExecutionOrder, OrderBook, PricingSide
from ..pipeline.keyed_store import KeyedEventStore, ServiceListener

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlgoExecution:
    execution_order: ExecutionOrder

    @property
    def persist_key(self) -> str:
        return self.execution_order.persist_key

    def to_fields(self):
        return self.execution_order.to_fields()


class AlgoExecutionService(KeyedEventStore[str, AlgoExecution]):

    def __init__(self, config: AlgoExecutionConfig):
        super().__init__(name="AlgoExecution")
        self.config = config
        self._execution_count = 0
        self._books_seen = 0
        self._books_too_wide = 0
        self.listener = AlgoExecutionServiceListener(self)

    @property
    def execution_count(self) -> int:
        return self._execution_count

    def execute_on_book(self, book: OrderBook) -> Optional[AlgoExecution]:
        """Run the crossing rule on one snapshot. Returns the decision, if any."""
        self._books_seen += 1
        if not book.bid_stack or not book.offer_stack:
            logger.debug(f"[AlgoExec] {book.product.product_id} one-sided book, skipped")
            return None

        bid_offer = book.bid_offer()
        bid, offer = bid_offer.bid_order, bid_offer.offer_order

        if offer.price - bid.price > self.config.spread_threshold:
            self._books_too_wide += 1
            return None

        if self._execution_count % 2 == 1:
            side, price, quantity = PricingSide.BID, bid.price, bid.quantity
        else:
            side, price, quantity = PricingSide.OFFER, offer.price, offer.quantity
        self._execution_count += 1

        order = ExecutionOrder(
            product=book.product,
            side=side,
            order_id=f"{self.config.order_id_prefix}{self._execution_count}",
            order_type=self.config.order_type,
            price=price,
            visible_quantity=quantity,
            hidden_quantity=0,
            parent_order_id=self.config.parent_order_id,
            is_child_order=False,
        )
        decision = AlgoExecution(execution_order=order)
        logger.debug(
            f"[AlgoExec] {order.order_id} {side.value} {quantity} "
            f"{book.product.product_id} @ {price}"
        )
        self.update(decision)
        return decision

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats.update({
            "execution_count": self._execution_count,
            "books_seen": self._books_seen,
            "books_too_wide": self._books_too_wide,
        })
        return stats


class AlgoExecutionServiceListener(ServiceListener[OrderBook]):
    """Market data → algo execution."""

    def __init__(self, service: AlgoExecutionService):
        self.service = service
        self.downstream = service

    def process_add(self, data: OrderBook) -> None:
        self.service.execute_on_book(data)
