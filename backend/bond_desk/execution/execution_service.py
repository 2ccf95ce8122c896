"""
Execution Service
─────────────────
Routes algo execution orders downstream. Every order is treated as fully
actionable on arrival: no acks, partial fills, cancels or replaces.
The store keeps the latest order per CUSIP.
"""

import logging
from collections import defaultdict
from typing import Any, Dict

from ..pipeline.event_types import ExecutionOrder
from ..pipeline.keyed_store import KeyedEventStore, ServiceListener
from ..strategy.algo_execution import AlgoExecution

logger = logging.getLogger(__name__)


class ExecutionService(KeyedEventStore[str, ExecutionOrder]):

    def __init__(self):
        super().__init__(name="Execution")
        self._orders_by_side: Dict[str, int] = defaultdict(int)
        self.listener = ExecutionServiceListener(self)

    def execute_order(self, order: ExecutionOrder) -> None:
        self._orders_by_side[order.side.value] += 1
        logger.debug(f"[Execution] routing {order.order_id} {order.product.product_id}")
        self.update(order)

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats["orders_by_side"] = dict(self._orders_by_side)
        return stats


class ExecutionServiceListener(ServiceListener[AlgoExecution]):
    """Algo execution → execution."""

    def __init__(self, service: ExecutionService):
        self.service = service
        self.downstream = service

    def process_add(self, data: AlgoExecution) -> None:
        self.service.execute_order(data.execution_order)
