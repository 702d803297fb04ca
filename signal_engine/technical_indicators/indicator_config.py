"""
Technical Indicator Configuration.
Defines periods and classification thresholds for every indicator.
"""

# ==================== MOMENTUM ====================
RSI_CONFIG = {
    'period': 14,
    # (upper bound inclusive, signal, tier), checked in order
    'bands': [
        (20, 'oversold', 'strong'),
        (30, 'oversold', 'moderate'),
        (45, 'oversold', 'weak'),
        (55, 'neutral', 'weak'),
        (70, 'overbought', 'weak'),
        (80, 'overbought', 'moderate'),
    ],
}

MACD_CONFIG = {
    'fast': 12,
    'slow': 26,
    'signal': 9,
    'crossover_threshold': 0.1,     # |histogram| below this counts as "at" the crossover
}

# ==================== TREND ====================
EMA_PAIR_CONFIG = {
    'fast': 20,
    'slow': 50,
    'min_points': 50,
    'dead_band': 0.005,             # 0.5% around EMA50 is neutral alignment
    'strong_spread': 0.05,          # spread > 5% of EMA50
    'moderate_spread': 0.02,
}

# ==================== VOLATILITY ====================
BOLLINGER_CONFIG = {
    'period': 20,
    'std_dev': 2,
    'bandwidth_lookback': 10,
    'squeeze_ratio': 0.7,
    'expansion_ratio': 1.3,
    'near_band': 0.2,               # %B within 0.2 of a band counts as "near"
}

# ==================== VOLUME ====================
VOLUME_CONFIG = {
    'period': 20,
    'spike_ratio': 2.0,
    'low_ratio': 0.7,
    'trend_window': 5,
    'increasing_ratio': 1.2,
    'decreasing_ratio': 0.8,
}

# ==================== PRICE STRUCTURE ====================
SUPPORT_RESISTANCE_CONFIG = {
    'period': 50,
    'swing_window': 2,              # bars on each side of a pivot
    'touch_tolerance': 0.015,
    'dedup_tolerance': 0.02,
    'proximity': 0.015,             # distance to a level that counts as "at" it
}
