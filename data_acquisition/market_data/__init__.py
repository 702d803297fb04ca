"""
Market data providers.

Importing this package registers every provider with ProviderRegistry.
"""

from .base_provider import MarketDataProvider, ProviderRegistry
from .polygon_provider import PolygonProvider
from .yahoo_provider import YahooProvider
from .seed_universe import SEED_UNIVERSE, seed_tickers, lookup_ticker_info
from .synthetic_series import generate_synthetic_bars

__all__ = [
    'MarketDataProvider',
    'ProviderRegistry',
    'PolygonProvider',
    'YahooProvider',
    'SEED_UNIVERSE',
    'seed_tickers',
    'lookup_ticker_info',
    'generate_synthetic_bars',
]
