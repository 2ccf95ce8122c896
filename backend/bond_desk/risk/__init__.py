from .position_service import PositionService, PositionServiceListener
from .risk_service import RiskService, RiskServiceListener

__all__ = [
    "PositionService",
    "PositionServiceListener",
    "RiskService",
    "RiskServiceListener",
]
