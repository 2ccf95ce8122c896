"""
Bond Desk Record Definitions
────────────────────────────
Every value flowing between the desk's stores is one of these records.
Records are plain values: a store keeps the latest one per key and
hands observers the same object it stored, so transforms always build
a new record instead of mutating one they received.

`to_fields()` is the display/persistence boundary: an ordered list of
strings, one call per record, formatted by whoever consumes it.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Union

from ..pricing.fractional import to_fraction
from ..reference.instruments import Bond, BucketedSector


class PricingSide(str, Enum):
    BID = "BID"
    OFFER = "OFFER"


class Side(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    FOK = "FOK"       # Fill-or-Kill
    IOC = "IOC"       # Immediate-or-Cancel
    MARKET = "MARKET"
    LIMIT = "LIMIT"
    STOP = "STOP"


class InquiryState(str, Enum):
    RECEIVED = "RECEIVED"
    QUOTED = "QUOTED"
    DONE = "DONE"
    REJECTED = "REJECTED"
    CUSTOMER_REJECTED = "CUSTOMER_REJECTED"


DISPLAY_NAMES: Dict[Enum, str] = {
    PricingSide.BID: "BID",
    PricingSide.OFFER: "OFFER",
    Side.BUY: "BUY",
    Side.SELL: "SELL",
    OrderType.FOK: "FOK",
    OrderType.IOC: "IOC",
    OrderType.MARKET: "MARKET",
    OrderType.LIMIT: "LIMIT",
    OrderType.STOP: "STOP",
    InquiryState.RECEIVED: "RECEIVED",
    InquiryState.QUOTED: "QUOTED",
    InquiryState.DONE: "DONE",
    InquiryState.REJECTED: "REJECTED",
    InquiryState.CUSTOMER_REJECTED: "CUSTOMER_REJECTED",
}

DISPLAY_ENUMS = (PricingSide, Side, OrderType, InquiryState)


def display_name(member: Enum) -> str:
    """Display string for an enum member. KeyError if the table misses it."""
    return DISPLAY_NAMES[member]


# ─── Market data ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Order:
    price: float
    quantity: int
    side: PricingSide


@dataclass(frozen=True)
class BidOffer:
    bid_order: Order
    offer_order: Order

    @property
    def spread(self) -> float:
        return self.offer_order.price - self.bid_order.price


@dataclass
class OrderBook:
    product: Bond
    bid_stack: List[Order] = field(default_factory=list)
    offer_stack: List[Order] = field(default_factory=list)

    @property
    def persist_key(self) -> str:
        return self.product.product_id

    def bid_offer(self) -> BidOffer:
        """
        Highest bid and lowest offer. On equal prices the entry met first
        in the stack wins. Raises ValueError if either side is empty.
        """
        if not self.bid_stack or not self.offer_stack:
            raise ValueError(f"order book for {self.product.product_id} has an empty side")

        best_bid = self.bid_stack[0]
        for order in self.bid_stack[1:]:
            if order.price > best_bid.price:
                best_bid = order

        best_offer = self.offer_stack[0]
        for order in self.offer_stack[1:]:
            if order.price < best_offer.price:
                best_offer = order

        return BidOffer(bid_order=best_bid, offer_order=best_offer)

    def copy(self) -> "OrderBook":
        return OrderBook(self.product, list(self.bid_stack), list(self.offer_stack))

    def to_fields(self) -> List[str]:
        fields = [self.product.product_id]
        for order in self.bid_stack + self.offer_stack:
            fields += [to_fraction(order.price), str(order.quantity), display_name(order.side)]
        return fields


# ─── Pricing / streaming ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Price:
    product: Bond
    mid: float
    bid_offer_spread: float

    @property
    def persist_key(self) -> str:
        return self.product.product_id

    def to_fields(self) -> List[str]:
        return [
            self.product.product_id,
            to_fraction(self.mid),
            to_fraction(self.bid_offer_spread),
        ]


@dataclass(frozen=True)
class PriceStreamOrder:
    price: float
    visible_quantity: int
    hidden_quantity: int
    side: PricingSide

    def to_fields(self) -> List[str]:
        return [
            to_fraction(self.price),
            str(self.visible_quantity),
            str(self.hidden_quantity),
            display_name(self.side),
        ]


@dataclass(frozen=True)
class PriceStream:
    product: Bond
    bid_order: PriceStreamOrder
    offer_order: PriceStreamOrder

    @property
    def persist_key(self) -> str:
        return self.product.product_id

    def to_fields(self) -> List[str]:
        return [self.product.product_id] + self.bid_order.to_fields() + self.offer_order.to_fields()


# ─── Execution / booking ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class ExecutionOrder:
    product: Bond
    side: PricingSide
    order_id: str
    order_type: OrderType
    price: float
    visible_quantity: int
    hidden_quantity: int
    parent_order_id: str
    is_child_order: bool = False

    @property
    def persist_key(self) -> str:
        return self.product.product_id

    @property
    def total_quantity(self) -> int:
        return self.visible_quantity + self.hidden_quantity

    def to_fields(self) -> List[str]:
        return [
            self.product.product_id,
            display_name(self.side),
            self.order_id,
            display_name(self.order_type),
            to_fraction(self.price),
            str(self.visible_quantity),
            str(self.hidden_quantity),
            self.parent_order_id,
            "YES" if self.is_child_order else "NO",
        ]


@dataclass(frozen=True)
class Trade:
    product: Bond
    trade_id: str
    price: float
    book: str
    quantity: int
    side: Side

    @property
    def persist_key(self) -> str:
        return self.trade_id

    @property
    def signed_quantity(self) -> int:
        return self.quantity if self.side == Side.BUY else -self.quantity

    def to_fields(self) -> List[str]:
        return [
            self.product.product_id,
            self.trade_id,
            to_fraction(self.price),
            self.book,
            str(self.quantity),
            display_name(self.side),
        ]


@dataclass
class Position:
    product: Bond
    positions: Dict[str, int] = field(default_factory=dict)

    @property
    def persist_key(self) -> str:
        return self.product.product_id

    def get_position(self, book: str) -> int:
        return self.positions.get(book, 0)

    def add_position(self, book: str, quantity: int):
        self.positions[book] = self.positions.get(book, 0) + quantity

    @property
    def aggregate_position(self) -> int:
        return sum(self.positions.values())

    def copy(self) -> "Position":
        return Position(self.product, dict(self.positions))

    def to_fields(self) -> List[str]:
        fields = [self.product.product_id]
        for book in sorted(self.positions):
            fields += [book, str(self.positions[book])]
        fields += ["AGGREGATE", str(self.aggregate_position)]
        return fields


# ─── Risk ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PV01:
    product: Union[Bond, BucketedSector]
    pv01: float
    quantity: int

    @property
    def persist_key(self) -> str:
        return self.product.product_id

    @property
    def value(self) -> float:
        return self.pv01 * self.quantity

    def to_fields(self) -> List[str]:
        return [
            self.product.product_id,
            f"{self.pv01:.6f}",
            str(self.quantity),
            f"{self.value:.6f}",
        ]


# ─── Inquiries ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Inquiry:
    inquiry_id: str
    product: Bond
    side: Side
    quantity: int
    price: float
    state: InquiryState = InquiryState.RECEIVED

    @property
    def persist_key(self) -> str:
        return self.inquiry_id

    def with_state(self, state: InquiryState) -> "Inquiry":
        return replace(self, state=state)

    def with_price(self, price: float) -> "Inquiry":
        return replace(self, price=price)

    def to_fields(self) -> List[str]:
        return [
            self.inquiry_id,
            self.product.product_id,
            display_name(self.side),
            str(self.quantity),
            to_fraction(self.price),
            display_name(self.state),
        ]
