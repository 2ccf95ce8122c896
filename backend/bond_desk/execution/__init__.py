from .execution_service import ExecutionService, ExecutionServiceListener
from .streaming_service import StreamingService, StreamingServiceListener
from .trade_booking import (
    EXECUTION_TO_TRADE_SIDE,
    TradeBookingService,
    TradeBookingServiceListener,
)

__all__ = [
    "ExecutionService",
    "ExecutionServiceListener",
    "StreamingService",
    "StreamingServiceListener",
    "EXECUTION_TO_TRADE_SIDE",
    "TradeBookingService",
    "TradeBookingServiceListener",
]
