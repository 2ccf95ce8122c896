"""
Bond Desk Orchestrator
══════════════════════
Builds the quote-to-risk pipeline and owns the entry points into it.

  prices ──→ [Pricing] ──→ [AlgoStreaming] ──→ [Streaming] ──→ history
  books  ──→ [MarketData] ──→ [AlgoExecution] ──→ [Execution] ──→ history
                                                        │
  trades ──────────────────────────────────────→ [TradeBooking]
                                                        ↓
                                   history ←── [Position] ──→ [Risk] ──→ history
  inquiries ──→ [Inquiry] ──→ history

Construction happens in two phases. `__init__` builds every store and
recorder; `wire()` subscribes them to each other in the order above and
checks the graph for cycles. Nothing may be ingested before `wire()`.

Everything runs on the caller's thread: each ingest call returns only
after every downstream store has seen the record.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from .config import DeskConfig
from .execution import ExecutionService, StreamingService, TradeBookingService
from .ingestion import InquiryFeed, MarketDataFeed, PriceFeed, TradeFeed
from .inquiry import InquiryService
from .monitoring import HistoricalDataService
from .orderbook import MarketDataService
from .pipeline.event_types import PV01, Inquiry, OrderBook, Price, Trade
from .pipeline.keyed_store import validate_acyclic
from .pricing.pricing_service import PricingService
from .reference import Bond, ReferenceData
from .risk import PositionService, RiskService
from .strategy import AlgoExecutionService, AlgoStreamingService

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class DeskOrchestrator:
    """Owns every store on the desk and the wiring between them."""

    def __init__(
        self,
        config: Optional[DeskConfig] = None,
        reference_data: Optional[ReferenceData] = None,
    ):
        self.config = (config or DeskConfig()).validate()
        self.reference_data = reference_data or ReferenceData.treasuries()

        self.pricing = PricingService()
        self.algo_streaming = AlgoStreamingService(self.config.algo_streaming)
        self.streaming = StreamingService()

        self.market_data = MarketDataService(self.config.market_data)
        self.algo_execution = AlgoExecutionService(self.config.algo_execution)
        self.execution = ExecutionService()

        self.trade_booking = TradeBookingService(self.config.booking)
        self.positions = PositionService()
        self.risk = RiskService(self.reference_data)

        self.inquiry = InquiryService()

        max_rows = self.config.history.max_rows_per_store
        self.history: Dict[str, HistoricalDataService] = {
            name: HistoricalDataService(name, max_rows=max_rows)
            for name in ("Streaming", "Execution", "Position", "Risk", "Inquiry")
        }

        self.price_feed = PriceFeed(self.reference_data, self.ingest_quote)
        self.market_data_feed = MarketDataFeed(
            self.reference_data, self.ingest_order_book, self.config.market_data.book_depth
        )
        self.trade_feed = TradeFeed(self.reference_data, self.ingest_trade)
        self.inquiry_feed = InquiryFeed(self.reference_data, self.ingest_inquiry)

        self._wired = False

    @property
    def stores(self):
        return [
            self.pricing, self.algo_streaming, self.streaming,
            self.market_data, self.algo_execution, self.execution,
            self.trade_booking, self.positions, self.risk,
            self.inquiry,
        ]

    @property
    def is_wired(self) -> bool:
        return self._wired

    def wire(self) -> "DeskOrchestrator":
        if self._wired:
            return self

        self.pricing.subscribe(self.algo_streaming.listener)
        self.algo_streaming.subscribe(self.streaming.listener)
        self.streaming.subscribe(self.history["Streaming"])

        self.market_data.subscribe(self.algo_execution.listener)
        self.algo_execution.subscribe(self.execution.listener)
        self.execution.subscribe(self.history["Execution"])
        self.execution.subscribe(self.trade_booking.listener)

        self.trade_booking.subscribe(self.positions.listener)
        self.positions.subscribe(self.risk.listener)
        self.positions.subscribe(self.history["Position"])
        self.risk.subscribe(self.history["Risk"])

        self.inquiry.subscribe(self.history["Inquiry"])

        validate_acyclic(self.stores)
        self._wired = True
        logger.info(
            f"[Desk] {self.config.desk_id} wired: {len(self.stores)} stores, "
            f"{len(self.reference_data.bonds)} bonds, books {self.config.booking.books}"
        )
        return self

    def _require_wired(self):
        if not self._wired:
            raise RuntimeError(f"desk {self.config.desk_id} must be wired before ingesting")

    # ── Record entry points ─────────────────────────────────

    def ingest_price(self, price: Price) -> None:
        self._require_wired()
        self.pricing.update(price)

    def ingest_quote(self, product: Bond, bid: float, offer: float) -> Price:
        self._require_wired()
        return self.pricing.on_quote(product, bid, offer)

    def ingest_order_book(self, book: OrderBook) -> None:
        self._require_wired()
        self.market_data.update(book)

    def ingest_trade(self, trade: Trade) -> None:
        self._require_wired()
        self.trade_booking.book_trade(trade)

    def ingest_inquiry(self, inquiry: Inquiry) -> None:
        self._require_wired()
        self.inquiry.update(inquiry)

    # ── File entry points ───────────────────────────────────

    def feed_prices(self, lines: Iterable[str]) -> int:
        return self.price_feed.subscribe(lines)

    def feed_market_data(self, lines: Iterable[str]) -> int:
        return self.market_data_feed.subscribe(lines)

    def feed_trades(self, lines: Iterable[str]) -> int:
        return self.trade_feed.subscribe(lines)

    def feed_inquiries(self, lines: Iterable[str]) -> int:
        return self.inquiry_feed.subscribe(lines)

    def load_prices(self, path: PathLike) -> int:
        return self._load(path, self.feed_prices)

    def load_market_data(self, path: PathLike) -> int:
        return self._load(path, self.feed_market_data)

    def load_trades(self, path: PathLike) -> int:
        return self._load(path, self.feed_trades)

    def load_inquiries(self, path: PathLike) -> int:
        return self._load(path, self.feed_inquiries)

    def _load(self, path: PathLike, feed) -> int:
        self._require_wired()
        with open(path, "r", encoding="utf-8") as f:
            delivered = feed(f)
        logger.info(f"[Desk] loaded {delivered} records from {path}")
        return delivered

    # ── Queries ─────────────────────────────────────────────

    def sector_risk(self, name: str) -> PV01:
        return self.risk.get_bucketed_risk(self.reference_data.sector(name))

    def get_system_status(self) -> Dict[str, Any]:
        return {
            "desk_id": self.config.desk_id,
            "wired": self._wired,
            "stores": {store.name: store.get_stats() for store in self.stores},
            "history": {name: h.get_stats() for name, h in self.history.items()},
            "feeds": {
                feed.name: feed.stats.to_dict()
                for feed in (self.price_feed, self.market_data_feed,
                             self.trade_feed, self.inquiry_feed)
            },
            "sector_risk": {
                name: self.sector_risk(name).value
                for name in self.reference_data.sectors
            },
        }
