"""
Scoring Module.

- TimeframeScorer: six weighted indicator sub-scores -> composite + confidence
- SignalAggregator: timeframe composites -> final score, strength, baseline risk
- explanations: reason/recommendation/analysis text, kept apart from the math
"""

from .timeframe_scorer import TimeframeScorer
from .signal_aggregator import (
    SignalAggregator,
    classify_strength,
    classify_signal_type,
    classify_data_quality,
    to_processed_signal,
)
from .indicator_scorers import INDICATOR_TABLE
from .processing_stats import summarize_signals

__all__ = [
    'TimeframeScorer',
    'SignalAggregator',
    'classify_strength',
    'classify_signal_type',
    'classify_data_quality',
    'to_processed_signal',
    'INDICATOR_TABLE',
    'summarize_signals',
]
