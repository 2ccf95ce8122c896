"""
Algo Streaming Engine
─────────────────────
Turns each internal mid/spread price into a two-way quote:

  bid   = mid − spread / 2
  offer = mid + spread / 2

Size alternates with every publish: 1mm visible on even counts, 2mm on
odd, hidden reserve always twice the visible size. Both legs carry the
same sizes.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict

from ..config import AlgoStreamingConfig
from ..pipeline.event_types import Price, PriceStream, PriceStreamOrder, PricingSide
from ..pipeline.keyed_store import KeyedEventStore, ServiceListener

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlgoStream:
    price_stream: PriceStream

    @property
    def persist_key(self) -> str:
        return self.price_stream.persist_key

    def to_fields(self):
        return self.price_stream.to_fields()


class AlgoStreamingService(KeyedEventStore[str, AlgoStream]):

    def __init__(self, config: AlgoStreamingConfig):
        super().__init__(name="AlgoStreaming")
        self.config = config
        self._publish_count = 0
        self.listener = AlgoStreamingServiceListener(self)

    @property
    def publish_count(self) -> int:
        return self._publish_count

    def publish_price(self, price: Price) -> AlgoStream:
        half_spread = price.bid_offer_spread / 2.0
        visible = (
            (self._publish_count % self.config.size_cycle + 1)
            * self.config.base_visible_quantity
        )
        hidden = visible * self.config.hidden_multiplier
        self._publish_count += 1

        stream = PriceStream(
            product=price.product,
            bid_order=PriceStreamOrder(price.mid - half_spread, visible, hidden, PricingSide.BID),
            offer_order=PriceStreamOrder(price.mid + half_spread, visible, hidden, PricingSide.OFFER),
        )
        algo_stream = AlgoStream(price_stream=stream)
        self.update(algo_stream)
        return algo_stream

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats["publish_count"] = self._publish_count
        return stats


class AlgoStreamingServiceListener(ServiceListener[Price]):
    """Pricing → algo streaming."""

    def __init__(self, service: AlgoStreamingService):
        self.service = service
        self.downstream = service

    def process_add(self, data: Price) -> None:
        self.service.publish_price(data)
