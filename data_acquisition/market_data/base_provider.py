"""
Base Provider - common protocol for market-data providers.

Provides:
1. The three calls the scan pipeline consumes (tickers, quote, OHLCV)
2. Shared helpers for turning raw rows into PriceBar/Quote models
3. A registry to pick a provider by name

A failed call logs and returns None. A provider that cannot serve at all
raises ProviderUnavailableError. The pipeline treats both as "unavailable"
and applies its fallback.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from utils.logger import setup_logger
from utils.numeric_utils import clean_numeric
from signal_engine.models import PriceBar, Quote

logger = setup_logger('base_provider')


class MarketDataProvider(ABC):
    """Abstract market-data provider."""

    source_name = "base"

    @abstractmethod
    def list_active_tickers(self, limit: int) -> Optional[List[str]]:
        """Up to `limit` active ticker symbols, or None if unavailable."""

    @abstractmethod
    def get_latest_quote(self, ticker: str) -> Optional[Quote]:
        """Latest quote, or None if unavailable."""

    @abstractmethod
    def get_ohlcv(self, ticker: str, timeframe: str, periods: int) -> Optional[List[PriceBar]]:
        """
        Last `periods` bars for `timeframe`, oldest first.

        Returns None when the provider failed and an empty list when it
        answered with no data.
        """

    @staticmethod
    def _make_bar(timestamp: datetime, open_: Any, high: Any, low: Any, close: Any, volume: Any) -> Optional[PriceBar]:
        """Build a PriceBar, dropping rows with a missing or non-positive close."""
        close_value = clean_numeric(close)
        if close_value is None or close_value <= 0:
            return None
        open_value = clean_numeric(open_) or close_value
        high_value = clean_numeric(high) or max(open_value, close_value)
        low_value = clean_numeric(low) or min(open_value, close_value)
        return PriceBar(
            timestamp=timestamp,
            open=open_value,
            high=max(high_value, open_value, close_value),
            low=min(low_value, open_value, close_value),
            close=close_value,
            volume=clean_numeric(volume) or 0.0,
        )


class ProviderRegistry:
    """Registry of available providers by name."""

    _providers: Dict[str, type] = {}

    @classmethod
    def register(cls, name: str, provider_class: type):
        cls._providers[name] = provider_class
        logger.debug(f"Registered provider: {provider_class.__name__} as {name}")

    @classmethod
    def get(cls, name: str) -> Optional[type]:
        return cls._providers.get(name)

    @classmethod
    def available_sources(cls) -> List[str]:
        return list(cls._providers.keys())

    @classmethod
    def create(cls, name: str, **kwargs) -> MarketDataProvider:
        """
        Instantiate a registered provider.

        Raises:
            ValueError: if no provider is registered under `name`
        """
        provider_class = cls.get(name)
        if provider_class is None:
            raise ValueError(
                f"Unknown market data provider '{name}'. Available: {', '.join(cls.available_sources())}"
            )
        return provider_class(**kwargs)
