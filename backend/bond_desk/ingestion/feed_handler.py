"""
Line-Record Feed Handlers
─────────────────────────
Decode comma-separated line records into desk records and hand them to
the owning store, one record per call:

  prices       CUSIP,bid,offer                          → Pricing.on_quote
  market data  CUSIP,price,quantity,side  (2×depth/book) → MarketData
  trades       CUSIP,tradeId,price,book,quantity,side   → TradeBooking
  inquiries    inquiryId,CUSIP,side,quantity,price,state → Inquiry

Prices use fractional notation ("99-16+"). A record with too few fields
is skipped; a record that fails to decode or names an unknown CUSIP is
logged and skipped. Neither stops the feed. For market data one bad line
drops the whole snapshot it belongs to.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type, TypeVar

from ..errors import RecordFormatError, UnknownInstrumentError
from ..pipeline.event_types import (
    Inquiry, InquiryState, Order, OrderBook, PricingSide, Side, Trade,
)
from ..pricing.fractional import from_fraction
from ..reference.instruments import Bond, ReferenceData

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class FeedStatistics:
    def __init__(self):
        self.records_received = 0
        self.records_delivered = 0
        self.short_records = 0
        self.parse_errors = 0
        self.unknown_instruments = 0
        self.batches_dropped = 0

    @property
    def records_skipped(self) -> int:
        return self.short_records + self.parse_errors + self.unknown_instruments

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records_received": self.records_received,
            "records_delivered": self.records_delivered,
            "short_records": self.short_records,
            "parse_errors": self.parse_errors,
            "unknown_instruments": self.unknown_instruments,
            "batches_dropped": self.batches_dropped,
        }


def parse_enum(enum_cls: Type[E], text: str, field_name: str) -> E:
    try:
        return enum_cls(text.upper())
    except ValueError:
        raise RecordFormatError(f"invalid {field_name} {text!r}") from None


def parse_quantity(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise RecordFormatError(f"invalid quantity {text!r}") from None


class LineFeed:
    """
    Base feed: splits lines, counts outcomes, delivers each decoded record
    to `sink`. Subclasses implement `parse`.
    """

    name = "feed"
    min_fields = 1

    def __init__(self, reference_data: ReferenceData, sink: Callable[[Any], None]):
        self.reference_data = reference_data
        self.sink = sink
        self.stats = FeedStatistics()

    def parse(self, fields: List[str]) -> Any:
        raise NotImplementedError

    def deliver(self, record: Any) -> None:
        self.sink(record)

    def subscribe(self, lines: Iterable[str]) -> int:
        """Consume `lines` (any iterable, e.g. an open file). Returns records delivered."""
        delivered_before = self.stats.records_delivered
        for line_no, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line:
                continue
            self.stats.records_received += 1
            fields = [f.strip() for f in line.split(",")]
            self._handle(line_no, line, fields)
        self._finish()

        delivered = self.stats.records_delivered - delivered_before
        logger.info(
            f"[Feed] {self.name}: {delivered} delivered, "
            f"{self.stats.records_skipped} skipped so far"
        )
        return delivered

    def _handle(self, line_no: int, line: str, fields: List[str]):
        if len(fields) < self.min_fields:
            self.stats.short_records += 1
            logger.debug(f"[Feed] {self.name} line {line_no}: {len(fields)} fields, skipped")
            return
        try:
            record = self.parse(fields)
            if record is not None:
                self.deliver(record)
                self.stats.records_delivered += 1
        except RecordFormatError as e:
            self.stats.parse_errors += 1
            logger.warning(f"[Feed] {self.name} line {line_no} skipped: {e} ({line!r})")
        except UnknownInstrumentError as e:
            self.stats.unknown_instruments += 1
            logger.warning(f"[Feed] {self.name} line {line_no} skipped: {e}")

    def _finish(self):
        pass


class PriceFeed(LineFeed):
    """Hands `sink(product, bid, offer)` to the pricing store, which derives mid and spread."""

    name = "prices"
    min_fields = 3

    def parse(self, fields: List[str]) -> Tuple[Bond, float, float]:
        product = self.reference_data.get_bond(fields[0])
        return product, from_fraction(fields[1]), from_fraction(fields[2])

    def deliver(self, record: Tuple[Bond, float, float]) -> None:
        self.sink(*record)


class TradeFeed(LineFeed):
    name = "trades"
    min_fields = 6

    def parse(self, fields: List[str]) -> Trade:
        return Trade(
            product=self.reference_data.get_bond(fields[0]),
            trade_id=fields[1],
            price=from_fraction(fields[2]),
            book=fields[3],
            quantity=parse_quantity(fields[4]),
            side=parse_enum(Side, fields[5], "side"),
        )


class InquiryFeed(LineFeed):
    name = "inquiries"
    min_fields = 6

    def parse(self, fields: List[str]) -> Inquiry:
        return Inquiry(
            inquiry_id=fields[0],
            product=self.reference_data.get_bond(fields[1]),
            side=parse_enum(Side, fields[2], "side"),
            quantity=parse_quantity(fields[3]),
            price=from_fraction(fields[4]),
            state=parse_enum(InquiryState, fields[5], "inquiry state"),
        )


class MarketDataFeed(LineFeed):
    """
    Order-book snapshots arrive as 2 × book_depth consecutive order lines
    for one CUSIP. Every non-blank line takes a slot in the current batch,
    so a bad line spoils its own snapshot and leaves the next one aligned.
    """

    name = "market data"
    min_fields = 4

    def __init__(self, reference_data: ReferenceData, sink: Callable[[Any], None], book_depth: int):
        super().__init__(reference_data, sink)
        self.batch_size = 2 * book_depth
        self._reset_batch()

    def _reset_batch(self):
        self._bids: List[Order] = []
        self._offers: List[Order] = []
        self._product_id: Optional[str] = None
        self._slots = 0
        self._spoiled = False

    def parse(self, fields: List[str]) -> None:
        product_id = fields[0]
        if self._product_id is not None and product_id != self._product_id:
            raise RecordFormatError(
                f"snapshot for {self._product_id} interleaved with {product_id}"
            )
        self._product_id = product_id
        order = Order(
            price=from_fraction(fields[1]),
            quantity=parse_quantity(fields[2]),
            side=parse_enum(PricingSide, fields[3], "side"),
        )
        if order.side == PricingSide.BID:
            self._bids.append(order)
        else:
            self._offers.append(order)
        return None

    def _handle(self, line_no: int, line: str, fields: List[str]):
        errors_before = self.stats.records_skipped
        super()._handle(line_no, line, fields)
        if self.stats.records_skipped != errors_before:
            self._spoiled = True

        self._slots += 1
        if self._slots == self.batch_size:
            self._complete_batch(line_no)

    def _complete_batch(self, line_no: int):
        product_id, spoiled = self._product_id, self._spoiled
        bids, offers = self._bids, self._offers
        self._reset_batch()

        if spoiled or product_id is None:
            self.stats.batches_dropped += 1
            logger.warning(f"[Feed] market data snapshot ending line {line_no} dropped")
            return
        try:
            book = OrderBook(self.reference_data.get_bond(product_id), bids, offers)
        except UnknownInstrumentError as e:
            self.stats.unknown_instruments += 1
            self.stats.batches_dropped += 1
            logger.warning(f"[Feed] market data snapshot ending line {line_no} dropped: {e}")
            return
        try:
            self.deliver(book)
        except UnknownInstrumentError as e:
            self.stats.unknown_instruments += 1
            logger.warning(f"[Feed] market data snapshot ending line {line_no} skipped: {e}")
            return
        self.stats.records_delivered += 1

    def _finish(self):
        if self._slots:
            self.stats.batches_dropped += 1
            logger.warning(
                f"[Feed] market data: trailing partial snapshot of {self._slots} lines dropped"
            )
            self._reset_batch()
