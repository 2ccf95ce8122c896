from .feed_handler import (
    FeedStatistics,
    InquiryFeed,
    LineFeed,
    MarketDataFeed,
    PriceFeed,
    TradeFeed,
)

__all__ = [
    "FeedStatistics",
    "InquiryFeed",
    "LineFeed",
    "MarketDataFeed",
    "PriceFeed",
    "TradeFeed",
]
