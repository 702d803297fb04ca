"""
Trend Indicators.
Implements the EMA20/EMA50 pair: alignment, price position, crosses and spread.
"""

from typing import Optional

from .indicator_config import EMA_PAIR_CONFIG
from .indicator_results import EMAPairResult
from .price_frame import PriceInput, to_close_series


def calculate_ema_pair(
    prices: PriceInput,
    fast: int = EMA_PAIR_CONFIG['fast'],
    slow: int = EMA_PAIR_CONFIG['slow'],
) -> Optional[EMAPairResult]:
    """
    Analyze the fast/slow EMA pair.

    Args:
        prices: Close prices, oldest first
        fast: Fast EMA span (default 20)
        slow: Slow EMA span (default 50)

    Returns:
        EMAPairResult, or None with fewer than max(min_points, slow) prices
    """
    close = to_close_series(prices)
    if len(close) < max(EMA_PAIR_CONFIG['min_points'], slow):
        return None

    ema_fast = close.ewm(span=fast, adjust=False).mean()
    ema_slow = close.ewm(span=slow, adjust=False).mean()

    # Rounded so float noise on a flat series cannot fake a cross
    fast_now, slow_now = round(float(ema_fast.iloc[-1]), 4), round(float(ema_slow.iloc[-1]), 4)
    fast_prev, slow_prev = round(float(ema_fast.iloc[-2]), 4), round(float(ema_slow.iloc[-2]), 4)
    price = float(close.iloc[-1])

    dead_band = EMA_PAIR_CONFIG['dead_band']
    if fast_now > slow_now * (1 + dead_band):
        alignment = 'bullish'
    elif fast_now < slow_now * (1 - dead_band):
        alignment = 'bearish'
    else:
        alignment = 'neutral'

    if price > fast_now and price > slow_now:
        price_position = 'above_both'
    elif price < fast_now and price < slow_now:
        price_position = 'below_both'
    else:
        price_position = 'between'

    cross = None
    if fast_prev <= slow_prev and fast_now > slow_now:
        cross = 'golden_cross'
    elif fast_prev >= slow_prev and fast_now < slow_now:
        cross = 'death_cross'

    spread = abs(fast_now - slow_now) / slow_now if slow_now else 0.0
    if spread > EMA_PAIR_CONFIG['strong_spread']:
        strength = 'strong'
    elif spread > EMA_PAIR_CONFIG['moderate_spread']:
        strength = 'moderate'
    else:
        strength = 'weak'

    return EMAPairResult(
        ema_fast=fast_now,
        ema_slow=slow_now,
        price=price,
        alignment=alignment,
        price_position=price_position,
        cross=cross,
        strength=strength,
        spread_pct=round(spread * 100, 2),
    )
