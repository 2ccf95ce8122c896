"""
Bond Desk Configuration
───────────────────────
Centralizes the tunable parameters of the quote-to-risk pipeline.
Defaults reproduce the reference desk; `DeskConfig.from_env` overlays
BOND_DESK_* variables (optionally read from a .env file).
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, TypeVar, Union

from dotenv import load_dotenv

from .errors import ConfigError
from .pipeline.event_types import OrderType

T = TypeVar("T")

ENV_PREFIX = "BOND_DESK_"


@dataclass
class MarketDataConfig:
    book_depth: int = 5  # price levels per side in one snapshot


@dataclass
class AlgoExecutionConfig:
    spread_threshold: float = 1.0 / 128.0
    order_id_prefix: str = "AlgoExec"
    parent_order_id: str = "PARENT_ORDER_ID"
    order_type: OrderType = OrderType.MARKET


@dataclass
class AlgoStreamingConfig:
    base_visible_quantity: int = 1_000_000
    size_cycle: int = 2
    hidden_multiplier: int = 2


@dataclass
class BookingConfig:
    books: List[str] = field(default_factory=lambda: ["TRSY1", "TRSY2", "TRSY3"])


@dataclass
class HistoryConfig:
    max_rows_per_store: int = 10_000


@dataclass
class DeskConfig:
    market_data: MarketDataConfig = field(default_factory=MarketDataConfig)
    algo_execution: AlgoExecutionConfig = field(default_factory=AlgoExecutionConfig)
    algo_streaming: AlgoStreamingConfig = field(default_factory=AlgoStreamingConfig)
    booking: BookingConfig = field(default_factory=BookingConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)

    desk_id: str = "UST-DESK-001"
    log_level: str = "INFO"

    def validate(self) -> "DeskConfig":
        if self.market_data.book_depth < 1:
            raise ConfigError(f"book_depth must be >= 1, got {self.market_data.book_depth}")
        if self.algo_execution.spread_threshold < 0:
            raise ConfigError(
                f"spread_threshold must be >= 0, got {self.algo_execution.spread_threshold}"
            )
        if not self.booking.books:
            raise ConfigError("at least one booking book is required")
        if len(set(self.booking.books)) != len(self.booking.books):
            raise ConfigError(f"duplicate booking books: {self.booking.books}")
        if self.algo_streaming.size_cycle < 1:
            raise ConfigError(f"size_cycle must be >= 1, got {self.algo_streaming.size_cycle}")
        if self.history.max_rows_per_store < 1:
            raise ConfigError(
                f"max_rows_per_store must be >= 1, got {self.history.max_rows_per_store}"
            )
        return self

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "DeskConfig":
        """Build a config from BOND_DESK_* variables, loading `env_file` first if given."""
        if env_file is not None:
            load_dotenv(env_file)

        config = cls()
        config.market_data.book_depth = _env("BOOK_DEPTH", int, config.market_data.book_depth)
        config.algo_execution.spread_threshold = _env(
            "SPREAD_THRESHOLD", _parse_fraction_or_float, config.algo_execution.spread_threshold
        )
        config.booking.books = _env("BOOKS", _parse_list, config.booking.books)
        config.history.max_rows_per_store = _env(
            "HISTORY_MAX_ROWS", int, config.history.max_rows_per_store
        )
        config.desk_id = _env("DESK_ID", str, config.desk_id)
        config.log_level = _env("LOG_LEVEL", str, config.log_level).upper()
        return config.validate()


def _env(name: str, parse: Callable[[str], T], default: T) -> T:
    raw = os.environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return parse(raw.strip())
    except (ValueError, ZeroDivisionError) as e:
        raise ConfigError(f"{ENV_PREFIX}{name}={raw!r}: {e}") from e


def _parse_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _parse_fraction_or_float(raw: str) -> float:
    # accepts "0.0078125" or "1/128"
    if "/" in raw:
        num, _, den = raw.partition("/")
        return float(num) / float(den)
    return float(raw)
