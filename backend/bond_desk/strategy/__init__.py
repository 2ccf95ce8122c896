from .algo_execution import AlgoExecution, AlgoExecutionService, AlgoExecutionServiceListener
from .algo_streaming import AlgoStream, AlgoStreamingService, AlgoStreamingServiceListener

__all__ = [
    "AlgoExecution",
    "AlgoExecutionService",
    "AlgoExecutionServiceListener",
    "AlgoStream",
    "AlgoStreamingService",
    "AlgoStreamingServiceListener",
]
