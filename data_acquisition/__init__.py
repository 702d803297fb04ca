"""
Data Acquisition Module

Collaborators around the signal engine:
    - market_data: providers for tickers, quotes and OHLCV history, plus the
      seed universe and the synthetic history fallback
    - storage: the signal write contract and its JSON-file backend
"""

from .market_data import MarketDataProvider, ProviderRegistry, YahooProvider, PolygonProvider
from .storage import SignalStore, JsonSignalStore

__all__ = [
    'MarketDataProvider',
    'ProviderRegistry',
    'YahooProvider',
    'PolygonProvider',
    'SignalStore',
    'JsonSignalStore',
]
