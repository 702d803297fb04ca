"""
Synthetic history fallback.

Generates a bounded random walk anchored to the last known price so a
ticker with missing history can still be scored. Every series produced
here is recorded as synthetic on the resulting signal.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import numpy as np

from config.pipeline_config import SYNTHETIC_SERIES_CONFIG, TIMEFRAME_CONFIG
from signal_engine.models import PriceBar

_TIMESPAN_DELTAS = {
    'hour': timedelta(hours=1),
    'day': timedelta(days=1),
    'week': timedelta(weeks=1),
}


def generate_synthetic_bars(
    anchor_price: float,
    timeframe: str,
    periods: int = SYNTHETIC_SERIES_CONFIG['PERIODS'],
    end: Optional[datetime] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[PriceBar]:
    """
    Build `periods` bars whose last close equals `anchor_price`.

    The walk drifts along a half sine wave and takes uniform steps inside
    +/- STEP_RANGE / 2; it is built backwards from the anchor so the final
    close is the real last price.

    Raises:
        ValueError: if anchor_price is not positive or periods < 1
    """
    if anchor_price <= 0:
        raise ValueError("anchor_price must be positive")
    if periods < 1:
        raise ValueError("periods must be at least 1")

    cfg = SYNTHETIC_SERIES_CONFIG
    rng = rng if rng is not None else np.random.default_rng(cfg['SEED'])
    tf_config = TIMEFRAME_CONFIG.get(timeframe, TIMEFRAME_CONFIG['1D'])
    step = _TIMESPAN_DELTAS[tf_config['timespan']] * tf_config['multiplier']
    end = end or datetime.now(timezone.utc)

    # Relative change from bar i-1 to bar i
    changes = [
        math.sin(i / periods * math.pi) * cfg['TREND_AMPLITUDE']
        + (rng.random() - 0.5) * cfg['STEP_RANGE']
        for i in range(periods)
    ]

    closes = [anchor_price]
    for change in reversed(changes[1:]):
        closes.append(max(closes[-1] / (1 + change), 0.01))
    closes.reverse()

    bars = []
    for i, close in enumerate(closes):
        open_ = closes[i - 1] if i > 0 else close / (1 + changes[0])
        high = max(open_, close) * (1 + rng.random() * cfg['INTRABAR_VOLATILITY'])
        low = min(open_, close) * (1 - rng.random() * cfg['INTRABAR_VOLATILITY'])
        bars.append(PriceBar(
            timestamp=end - step * (periods - 1 - i),
            open=round(open_, 4),
            high=round(high, 4),
            low=round(low, 4),
            close=round(close, 4),
            volume=float(int(cfg['BASE_VOLUME'] * (0.5 + rng.random()))),
        ))
    return bars
