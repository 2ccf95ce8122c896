"""
Position Service
────────────────
Nets booked trades into per-book positions for each CUSIP.

Each trade adds its signed quantity (BUY +, SELL −) to its book's running
total; all other books keep their prior totals. The aggregate position is
the sum over books. A fresh Position record is stored and published on
every trade, so earlier records handed to listeners never change.
"""

import logging
from typing import Any, Dict

from ..pipeline.event_types import Position, Trade
from ..pipeline.keyed_store import KeyedEventStore, ServiceListener

logger = logging.getLogger(__name__)


class PositionService(KeyedEventStore[str, Position]):

    def __init__(self):
        super().__init__(name="Position")
        self._trades_applied = 0
        self.listener = PositionServiceListener(self)

    def add_trade(self, trade: Trade) -> Position:
        previous = self.get(trade.product.product_id)
        position = previous.copy() if previous else Position(product=trade.product)
        position.add_position(trade.book, trade.signed_quantity)
        self._trades_applied += 1

        logger.debug(
            f"[Position] {trade.product.product_id} {trade.book} "
            f"{trade.signed_quantity:+d} → aggregate {position.aggregate_position}"
        )
        self.update(position)
        return position

    def get_aggregate_position(self, product_id: str) -> int:
        position = self.get(product_id)
        return position.aggregate_position if position else 0

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats["trades_applied"] = self._trades_applied
        stats["aggregate"] = {
            pid: pos.aggregate_position for pid, pos in self._data.items()
        }
        return stats


class PositionServiceListener(ServiceListener[Trade]):
    """Trade booking → positions."""

    def __init__(self, service: PositionService):
        self.service = service
        self.downstream = service

    def process_add(self, data: Trade) -> None:
        self.service.add_trade(data)
