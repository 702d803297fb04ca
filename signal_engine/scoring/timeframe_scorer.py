"""
Timeframe Scorer.
Turns one timeframe's IndicatorSet into a weighted composite and a confidence.
"""

from typing import Callable, Iterable, Optional

import numpy as np

from utils.numeric_utils import clamp, round_half_up
from signal_engine.models import IndicatorScore, PriceBar, TimeframeScore
from signal_engine.technical_indicators import IndicatorSet, calculate_all_indicators
from .indicator_scorers import INDICATOR_TABLE
from .explanations import describe_indicator

Explainer = Callable[[str, Optional[object]], str]


class TimeframeScorer:
    """
    Weighted composite scorer for a single timeframe.

    Composite = sum(sub-score * weight), rounded and clamped to [0, 100].
    Confidence = 100 - sqrt(variance of sub-scores): agreeing indicators
    give high confidence.
    """

    def __init__(self, explainer: Optional[Explainer] = describe_indicator):
        """
        Args:
            explainer: Builds the reason text for each sub-score; pass None
                to skip text generation entirely.
        """
        self.explainer = explainer

    def score(self, timeframe: str, indicators: IndicatorSet) -> TimeframeScore:
        scores = {}
        for name, (weight, score_fn) in INDICATOR_TABLE.items():
            result = getattr(indicators, name)
            sub_score = clamp(float(score_fn(result)))
            scores[name] = IndicatorScore(
                name=name,
                score=sub_score,
                weight=weight,
                contribution=round(sub_score * weight, 4),
                reason=self.explainer(name, result) if self.explainer else "",
            )

        composite = clamp(round_half_up(sum(s.score * s.weight for s in scores.values())))
        # Population std (ddof=0) of the six sub-scores
        spread = float(np.std([s.score for s in scores.values()]))
        confidence = clamp(round_half_up(100 - spread))

        return TimeframeScore(
            timeframe=timeframe,
            scores=scores,
            composite_score=composite,
            confidence=confidence,
            indicators_available=sum(getattr(indicators, name) is not None for name in INDICATOR_TABLE),
        )

    def score_bars(self, timeframe: str, bars: Iterable[PriceBar]) -> TimeframeScore:
        """Compute indicators for `bars` and score them."""
        return self.score(timeframe, calculate_all_indicators(bars))
