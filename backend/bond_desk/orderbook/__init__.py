from .market_data import MarketDataService, aggregate_orders

__all__ = ["MarketDataService", "aggregate_orders"]
