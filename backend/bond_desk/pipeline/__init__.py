from .keyed_store import (
    CallbackListener,
    KeyedEventStore,
    ServiceListener,
    validate_acyclic,
)
from .event_types import (
    BidOffer,
    DISPLAY_ENUMS,
    DISPLAY_NAMES,
    ExecutionOrder,
    Inquiry,
    InquiryState,
    Order,
    OrderBook,
    OrderType,
    Position,
    Price,
    PriceStream,
    PriceStreamOrder,
    PricingSide,
    PV01,
    Side,
    Trade,
    display_name,
)

__all__ = [
    "CallbackListener",
    "KeyedEventStore",
    "ServiceListener",
    "validate_acyclic",
    "BidOffer",
    "DISPLAY_ENUMS",
    "DISPLAY_NAMES",
    "ExecutionOrder",
    "Inquiry",
    "InquiryState",
    "Order",
    "OrderBook",
    "OrderType",
    "Position",
    "Price",
    "PriceStream",
    "PriceStreamOrder",
    "PricingSide",
    "PV01",
    "Side",
    "Trade",
    "display_name",
]
