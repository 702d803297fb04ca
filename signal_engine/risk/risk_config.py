"""
Risk Management Configuration.
Stop distances, tolerance scaling and validation limits for interactive risk calculations.
"""

# Stop distance as a fraction of entry, chosen by signal conviction
STOP_LOSS_CONFIG = {
    'strong_conviction': 90,        # conviction >= 90 uses the wide stop
    'strong_pct': 0.02,
    'default_pct': 0.015,
}

# Risk tolerance scales the stop distance
RISK_TOLERANCE_MULTIPLIERS = {
    'conservative': 0.75,
    'moderate': 1.0,
    'aggressive': 1.5,
}

REWARD_CONFIG = {
    'tiers': [(80, 3.0), (60, 2.5)],    # (conviction >=, reward multiple)
    'default': 2.0,
    'neutral': 1.5,
}

RISK_LEVEL_CONFIG = {
    'low_min_rr': 2.5,
    'low_min_score': 80,
    'high_max_rr': 1.5,             # rr below this is high risk
    'high_max_score': 60,           # conviction below this is high risk
}

VALIDATION_LIMITS = {
    'min_risk_reward': 1.5,
    'max_stop_distance_pct': 10.0,
    'min_score': 60,
}
