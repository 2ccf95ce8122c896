"""
Customer Inquiry Service
────────────────────────
Tracks customer inquiries keyed by inquiry id.

Lifecycle:
  RECEIVED → QUOTED → DONE
  any state → REJECTED            (reject_inquiry)
  CUSTOMER_REJECTED               (defined; no transition leads to it)

Ingesting a RECEIVED inquiry stores it and publishes a quote back through
the service, which flips it to QUOTED and re-ingests it. Ingesting a
QUOTED inquiry completes it as DONE, stores it and notifies listeners.
So a RECEIVED inquiry finishes as DONE within one `update()` call, with
exactly one notification.

`send_quote` re-prices a stored inquiry and notifies listeners without
touching its state. `reject_inquiry` marks it REJECTED silently.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, List

from ..errors import UnknownInquiryError
from ..pipeline.event_types import Inquiry, InquiryState
from ..pipeline.keyed_store import KeyedEventStore

logger = logging.getLogger(__name__)


class InquiryService(KeyedEventStore[str, Inquiry]):

    def __init__(self):
        super().__init__(name="Inquiry")
        self._transitions: Dict[str, List[InquiryState]] = defaultdict(list)
        self._quotes_published = 0
        self._ignored = 0

    def key_for(self, data: Inquiry) -> str:
        return data.inquiry_id

    def update(self, data: Inquiry) -> None:
        if data.state == InquiryState.RECEIVED:
            self._store(data)
            self._transitions[data.inquiry_id].append(InquiryState.RECEIVED)
            self.publish_quote(data)
        elif data.state == InquiryState.QUOTED:
            done = data.with_state(InquiryState.DONE)
            self._store(done)
            self._transitions[data.inquiry_id].append(InquiryState.DONE)
            self._notify(done)
        else:
            self._ignored += 1
            logger.warning(
                f"[Inquiry] {data.inquiry_id} arrived in state {data.state.value}, ignored"
            )

    def publish_quote(self, data: Inquiry) -> None:
        """Quote a RECEIVED inquiry back to the customer and re-ingest it as QUOTED."""
        if data.state != InquiryState.RECEIVED:
            return
        quoted = data.with_state(InquiryState.QUOTED)
        self._quotes_published += 1
        self._transitions[data.inquiry_id].append(InquiryState.QUOTED)
        self.update(quoted)

    def _inquiry(self, inquiry_id: str) -> Inquiry:
        inquiry = self.get(inquiry_id)
        if inquiry is None:
            raise UnknownInquiryError(inquiry_id)
        return inquiry

    def send_quote(self, inquiry_id: str, price: float) -> Inquiry:
        # state is left as-is; only the price changes
        repriced = self._inquiry(inquiry_id).with_price(price)
        self._store(repriced)
        self._notify(repriced)
        return repriced

    def reject_inquiry(self, inquiry_id: str) -> Inquiry:
        rejected = self._inquiry(inquiry_id).with_state(InquiryState.REJECTED)
        self._store(rejected)
        self._transitions[inquiry_id].append(InquiryState.REJECTED)
        logger.info(f"[Inquiry] {inquiry_id} rejected")
        return rejected

    def get_transitions(self, inquiry_id: str) -> List[InquiryState]:
        return list(self._transitions.get(inquiry_id, []))

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        by_state: Dict[str, int] = defaultdict(int)
        for inquiry in self._data.values():
            by_state[inquiry.state.value] += 1
        stats.update({
            "quotes_published": self._quotes_published,
            "ignored": self._ignored,
            "by_state": dict(by_state),
        })
        return stats
