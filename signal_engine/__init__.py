"""
Signal Engine - technical signal scoring and generation.

Turns multi-timeframe price history into ranked trade signals:
indicators -> per-timeframe composite -> final score, strength and risk levels.
"""
