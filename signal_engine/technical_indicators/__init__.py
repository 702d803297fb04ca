"""
Technical Indicators Module.

Pure indicator calculations over price series:
- Momentum: RSI, MACD
- Trend: EMA20/EMA50 pair
- Volatility: Bollinger Bands
- Volume: relative volume and trend
- Price Structure: support/resistance

Every calculator returns None instead of raising when the series is too short.
"""

from .indicator_library import calculate_all_indicators
from .indicator_results import (
    IndicatorSet,
    RSIResult,
    MACDResult,
    EMAPairResult,
    BollingerResult,
    VolumeResult,
    SupportResistanceResult,
    PriceLevel,
)
from .momentum_indicators import calculate_rsi, calculate_macd
from .trend_indicators import calculate_ema_pair
from .volatility_indicators import calculate_bollinger
from .volume_indicators import calculate_volume
from .price_structure_indicators import calculate_support_resistance

__all__ = [
    'calculate_all_indicators',
    'calculate_rsi',
    'calculate_macd',
    'calculate_ema_pair',
    'calculate_bollinger',
    'calculate_volume',
    'calculate_support_resistance',
    'IndicatorSet',
    'RSIResult',
    'MACDResult',
    'EMAPairResult',
    'BollingerResult',
    'VolumeResult',
    'SupportResistanceResult',
    'PriceLevel',
]
