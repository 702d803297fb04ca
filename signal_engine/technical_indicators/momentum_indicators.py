"""
Momentum Indicators.
Implements RSI and MACD readings.
"""

from typing import Optional, Tuple

from .indicator_config import RSI_CONFIG, MACD_CONFIG
from .indicator_results import RSIResult, MACDResult
from .price_frame import PriceInput, to_close_series


def classify_rsi(value: float) -> Tuple[str, str]:
    """
    Map an RSI value onto its (signal, tier) band.

    Returns:
        Tuple like ('oversold', 'strong')
    """
    for upper, signal, tier in RSI_CONFIG['bands']:
        if value <= upper:
            return signal, tier
    return 'overbought', 'strong'


def calculate_rsi(prices: PriceInput, period: int = RSI_CONFIG['period']) -> Optional[RSIResult]:
    """
    Calculate RSI from the trailing `period` price changes.

    Uses simple average gain and loss over the window. When the window has
    no losses the RSI is pinned to 100.

    Args:
        prices: Close prices, oldest first
        period: Number of changes to average

    Returns:
        RSIResult, or None when fewer than period + 1 prices are given
    """
    close = to_close_series(prices)
    if period < 1 or len(close) < period + 1:
        return None

    changes = close.diff().tail(period)
    avg_gain = changes.clip(lower=0).mean()
    avg_loss = (-changes.clip(upper=0)).mean()

    if avg_loss == 0:
        return RSIResult(value=100.0, signal='overbought', strength='strong')

    rs = avg_gain / avg_loss
    # Keep 100 reserved for the zero-loss case after rounding
    value = min(round(100 - 100 / (1 + rs), 2), 99.99)
    signal, tier = classify_rsi(value)
    return RSIResult(value=value, signal=signal, strength=tier)


def calculate_macd(
    prices: PriceInput,
    fast: int = MACD_CONFIG['fast'],
    slow: int = MACD_CONFIG['slow'],
    signal: int = MACD_CONFIG['signal'],
) -> Optional[MACDResult]:
    """
    Calculate MACD with a rolling signal line.

    MACD = EMA(fast) - EMA(slow); the signal line is the EMA of the whole
    MACD series. Trend follows the side of zero the MACD line is on.
    A crossover is reported only while the histogram sits within the
    crossover threshold on the side of zero that matches the trend.

    Returns:
        MACDResult, or None when fewer than slow + signal prices are given
    """
    close = to_close_series(prices)
    if len(close) < slow + signal:
        return None

    ema_fast = close.ewm(span=fast, adjust=False).mean()
    ema_slow = close.ewm(span=slow, adjust=False).mean()
    macd_line = ema_fast - ema_slow
    signal_line = macd_line.ewm(span=signal, adjust=False).mean()
    histogram = macd_line - signal_line

    # Classify on rounded values so float noise on a flat series reads as zero
    macd_value = round(float(macd_line.iloc[-1]), 4)
    hist = round(float(histogram.iloc[-1]), 4)

    if macd_value > 0:
        trend = 'bullish'
    elif macd_value < 0:
        trend = 'bearish'
    else:
        trend = 'neutral'

    crossover = None
    if abs(hist) < MACD_CONFIG['crossover_threshold']:
        if hist > 0 and trend == 'bullish':
            crossover = 'bullish'
        elif hist < 0 and trend == 'bearish':
            crossover = 'bearish'

    return MACDResult(
        macd=macd_value,
        signal_line=round(float(signal_line.iloc[-1]), 4),
        histogram=hist,
        trend=trend,
        crossover=crossover,
    )
