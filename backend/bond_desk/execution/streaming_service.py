"""
Streaming Service
─────────────────
Publishes the two-way quotes built by the streaming algo. Holds the
latest stream per CUSIP; each publish goes to every listener.
"""

import logging
from typing import Any, Dict

from ..pipeline.event_types import PriceStream
from ..pipeline.keyed_store import KeyedEventStore, ServiceListener
from ..strategy.algo_streaming import AlgoStream

logger = logging.getLogger(__name__)


class StreamingService(KeyedEventStore[str, PriceStream]):

    def __init__(self):
        super().__init__(name="Streaming")
        self._published = 0
        self.listener = StreamingServiceListener(self)

    def publish_price(self, stream: PriceStream) -> None:
        self._published += 1
        self.update(stream)

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats["published"] = self._published
        return stats


class StreamingServiceListener(ServiceListener[AlgoStream]):
    """Algo streaming → streaming."""

    def __init__(self, service: StreamingService):
        self.service = service
        self.downstream = service

    def process_add(self, data: AlgoStream) -> None:
        self.service.publish_price(data.price_stream)
