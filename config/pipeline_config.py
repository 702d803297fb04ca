"""
Pipeline Configuration
Centralized defaults for signal generation runs, timeframes and the
synthetic history fallback.
"""

from typing import Dict, Any

# --- Generation Run Defaults ---
# Used by ScanPipeline when the caller leaves a field unset
PIPELINE_DEFAULTS: Dict[str, Any] = {
    "POOL_SIZE": 50,              # max tickers taken from discovery
    "BATCH_SIZE": 5,              # concurrent fetches per batch
    "BATCH_DELAY_SECONDS": 1.0,   # pause between batches (provider backpressure)
    "MIN_SCORE": 60,
    "MAX_SIGNALS": 20,
    "HISTORY_PERIODS": 100,       # bars requested per timeframe
}

# --- Quote Validation ---
# A quote below either floor is treated as untradeable and the ticker is skipped
QUOTE_FILTERS: Dict[str, float] = {
    "MIN_PRICE": 1.0,
    "MIN_VOLUME": 100_000,
}

# --- Timeframes ---
# multiplier/timespan follow the Polygon aggregates API; lookback bounds the request window
TIMEFRAME_CONFIG: Dict[str, Dict[str, Any]] = {
    "1H": {"multiplier": 1, "timespan": "hour", "lookback_days": 30},
    "4H": {"multiplier": 4, "timespan": "hour", "lookback_days": 60},
    "1D": {"multiplier": 1, "timespan": "day", "lookback_days": 200},
    "1W": {"multiplier": 1, "timespan": "week", "lookback_days": 730},
}

DEFAULT_TIMEFRAMES = ["1H", "4H", "1D", "1W"]

# --- Synthetic History Fallback ---
# Random walk anchored to the last known price when real history is unavailable
SYNTHETIC_SERIES_CONFIG: Dict[str, Any] = {
    "PERIODS": 50,
    "TREND_AMPLITUDE": 0.01,      # sin-shaped drift per bar
    "STEP_RANGE": 0.04,           # uniform step in [-2%, +2%]
    "INTRABAR_VOLATILITY": 0.015, # high/low excursion around open/close
    "BASE_VOLUME": 1_000_000,
    "SEED": None,                 # set an int for reproducible runs
}

# --- Signal Lifetime ---
SIGNAL_EXPIRY_HOURS = 24
