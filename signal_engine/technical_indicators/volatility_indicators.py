"""
Volatility Indicators.
Implements Bollinger Bands with %B, bandwidth, squeeze/expansion and breakouts.
"""

from typing import Optional

from .indicator_config import BOLLINGER_CONFIG
from .indicator_results import BollingerResult
from .price_frame import PriceInput, to_close_series


def calculate_bollinger(
    prices: PriceInput,
    period: int = BOLLINGER_CONFIG['period'],
    std_dev: float = BOLLINGER_CONFIG['std_dev'],
) -> Optional[BollingerResult]:
    """
    Calculate Bollinger Bands for the latest bar.

    Bands use the population standard deviation of the last `period` closes.
    Squeeze/expansion compare the current bandwidth with the average of the
    previous `bandwidth_lookback` bandwidth samples; with no history yet the
    current bandwidth is its own average.

    Returns:
        BollingerResult, or None with fewer than `period` prices
    """
    close = to_close_series(prices)
    if period < 2 or len(close) < period:
        return None

    middle_series = close.rolling(window=period).mean()
    std_series = close.rolling(window=period).std(ddof=0)
    upper_series = middle_series + std_dev * std_series
    lower_series = middle_series - std_dev * std_series
    bandwidth_series = ((upper_series - lower_series) / middle_series).where(middle_series != 0, 0.0)

    middle = float(middle_series.iloc[-1])
    upper = float(upper_series.iloc[-1])
    lower = float(lower_series.iloc[-1])
    price = float(close.iloc[-1])
    bandwidth = float(bandwidth_series.iloc[-1])

    history = bandwidth_series.iloc[:-1].dropna().tail(BOLLINGER_CONFIG['bandwidth_lookback'])
    average_bandwidth = float(history.mean()) if len(history) else bandwidth

    band_range = upper - lower
    percent_b = (price - lower) / band_range if band_range > 0 else 0.5

    squeeze = average_bandwidth > 0 and bandwidth < BOLLINGER_CONFIG['squeeze_ratio'] * average_bandwidth
    expansion = average_bandwidth > 0 and bandwidth > BOLLINGER_CONFIG['expansion_ratio'] * average_bandwidth

    near = BOLLINGER_CONFIG['near_band']
    if percent_b > 1:
        position = 'above_upper'
    elif percent_b >= 1 - near:
        position = 'near_upper'
    elif percent_b < 0:
        position = 'below_lower'
    elif percent_b <= near:
        position = 'near_lower'
    else:
        position = 'middle'

    if price > upper and expansion:
        signal = 'bullish_breakout'
    elif price < lower and expansion:
        signal = 'bearish_breakout'
    elif position in ('above_upper', 'near_upper'):
        signal = 'overbought'
    elif position in ('below_lower', 'near_lower'):
        signal = 'oversold'
    elif squeeze:
        signal = 'squeeze'
    else:
        signal = 'neutral'

    return BollingerResult(
        upper=round(upper, 4),
        middle=round(middle, 4),
        lower=round(lower, 4),
        percent_b=round(percent_b, 4),
        bandwidth=round(bandwidth, 4),
        average_bandwidth=round(average_bandwidth, 4),
        squeeze=bool(squeeze),
        expansion=bool(expansion),
        position=position,
        signal=signal,
    )
