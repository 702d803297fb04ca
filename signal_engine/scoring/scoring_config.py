"""
Signal Scoring Configuration.
Defines weights, score tables and risk parameters for signal scoring.
"""

# ==================== INDICATOR WEIGHTS ====================
# Must sum to 1.0
INDICATOR_WEIGHTS = {
    'rsi': 0.25,
    'macd': 0.25,
    'ema_pair': 0.20,
    'bollinger': 0.15,
    'support_resistance': 0.10,
    'volume': 0.05,
}

# ==================== TIMEFRAME WEIGHTS ====================
# Must sum to 1.0; re-normalized over the timeframes that had data
TIMEFRAME_WEIGHTS = {
    '1H': 0.40,
    '4H': 0.30,
    '1D': 0.20,
    '1W': 0.10,
}

NEUTRAL_SCORE = 50

# ==================== INDICATOR SCORE TABLES ====================
# Oversold readings score high (mean-reversion entry)
RSI_SCORES = [          # (RSI <= threshold, score)
    (20, 95),
    (30, 85),
    (45, 65),
    (55, 50),
    (70, 40),
    (80, 25),
]
RSI_FLOOR_SCORE = 10

MACD_SCORES = {
    'bullish_crossover': 90,
    'bearish_crossover': 10,
    'positive_above_zero': 75,      # histogram > 0, MACD > 0
    'positive_below_zero': 65,      # histogram > 0, MACD <= 0
    'negative_below_zero': 25,
    'negative_above_zero': 35,
}

EMA_SCORES = {
    'golden_cross': 90,
    'death_cross': 10,
    'alignment': {
        ('bullish', 'strong'): 85,
        ('bullish', 'moderate'): 75,
        ('bullish', 'weak'): 65,
        ('bearish', 'weak'): 35,
        ('bearish', 'moderate'): 25,
        ('bearish', 'strong'): 15,
    },
    'position_adjustment': {
        'above_both': 5,
        'below_both': -5,
        'between': 0,
    },
}

BOLLINGER_SCORES = {
    'bullish_breakout': 85,
    'bearish_breakout': 15,
    'percent_b': [      # (%B <= threshold, score)
        (0.0, 90),
        (0.2, 80),
        (0.4, 60),
        (0.6, 50),
        (0.8, 40),
        (1.0, 20),
    ],
    'above_upper': 10,
    'squeeze_floor': 55,            # mid-band squeeze leans toward a move
}

SUPPORT_RESISTANCE_SCORES = {
    'at_support_base': 80,
    'per_touch': 3,
    'max_touches': 5,
    'at_resistance': 25,
    'breakout': 80,
    'in_range_top': 70,             # score at the bottom of the range
    'in_range_slope': 0.4,          # points lost per range percent
}

VOLUME_SCORES = {
    'bullish': 90,
    'bearish': 20,
    'spike': 75,
    'elevated_ratio': 1.5,
    'elevated': 65,
    'normal_ratio': 0.8,
    'normal': 50,
    'low': 40,
}

# ==================== STRENGTH & SIGNAL TYPE ====================
STRENGTH_THRESHOLDS = [     # (final score >=, strength)
    (90, 'STRONG_BUY'),
    (80, 'BUY'),
    (60, 'WEAK_BUY'),
    (40, 'NEUTRAL'),
    (20, 'WEAK_SELL'),
    (10, 'SELL'),
]

SIGNAL_TYPE_THRESHOLDS = {
    'bullish': 60,      # >= 60
    'bearish': 40,      # < 40
}

# Number of timeframes with data -> quality label
DATA_QUALITY_LABELS = [
    (4, 'excellent'),
    (3, 'good'),
    (2, 'limited'),
]

# ==================== BASELINE RISK ====================
STOP_LOSS_PCT = {
    'strong': 0.02,
    'default': 0.015,
}

REWARD_MULTIPLIERS = [      # (final score >=, multiplier)
    (80, 3.0),
    (60, 2.5),
]
DEFAULT_REWARD_MULTIPLIER = 2.0
