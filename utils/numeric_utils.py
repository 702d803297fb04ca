"""
Numeric Utilities - shared numeric handling for indicators and scoring.

Provides:
1. Cleaning of provider values (NaN/Inf/None)
2. Score clamping and half-up rounding
"""

import math
from typing import Any, Optional


def clean_numeric(value: Any) -> Optional[float]:
    """
    Clean a numeric value, returning None for invalid values.

    Use on every raw value coming back from a market-data provider before
    it enters a PriceBar or Quote.

    Args:
        value: Raw value (float, int, numeric string, None or NaN)

    Returns:
        Float value if valid, None if value is missing/invalid
    """
    if value is None:
        return None

    try:
        float_value = float(value)
    except (ValueError, TypeError):
        return None
    if math.isnan(float_value) or math.isinf(float_value):
        return None
    return float_value


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    """Clamp `value` into [lower, upper]."""
    return max(lower, min(upper, value))


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round with halves away from zero for positive values.

    Python's round() uses banker's rounding, which would turn a 72.5
    composite into 72; scores are rounded half-up instead.

    Examples:
        >>> round_half_up(72.5)
        73.0
        >>> round_half_up(1.005, 2)
        1.01
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5 + 1e-9) / factor
