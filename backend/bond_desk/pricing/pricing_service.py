"""
Internal Pricing Service
────────────────────────
Holds the latest mid/spread price per CUSIP. Feeds the streaming algo;
prices arrive from the quote feed as bid/offer pairs.
"""

import logging

from ..pipeline.event_types import Price
from ..pipeline.keyed_store import KeyedEventStore
from ..reference.instruments import Bond

logger = logging.getLogger(__name__)


class PricingService(KeyedEventStore[str, Price]):
    def __init__(self):
        super().__init__(name="Pricing")

    def on_quote(self, product: Bond, bid: float, offer: float) -> Price:
        """Derive mid and spread from a bid/offer pair and publish the price."""
        price = Price(
            product=product,
            mid=(bid + offer) / 2.0,
            bid_offer_spread=offer - bid,
        )
        self.update(price)
        return price
