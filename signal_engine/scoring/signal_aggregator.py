"""
Signal Aggregator.
Combines per-timeframe composites into a final score, a strength label and
baseline risk levels, and projects the result into a persistable signal.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Tuple

from config.pipeline_config import SIGNAL_EXPIRY_HOURS
from utils.numeric_utils import clamp, round_half_up
from signal_engine.models import (
    FinalSignalScore, ProcessedSignal, SignalStrength, TickerInfo, TimeframeScore,
)
from .scoring_config import (
    TIMEFRAME_WEIGHTS, NEUTRAL_SCORE, STRENGTH_THRESHOLDS, STOP_LOSS_PCT,
    REWARD_MULTIPLIERS, DEFAULT_REWARD_MULTIPLIER, SIGNAL_TYPE_THRESHOLDS, DATA_QUALITY_LABELS,
)
from . import explanations


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def classify_strength(score: float) -> SignalStrength:
    for threshold, label in STRENGTH_THRESHOLDS:
        if score >= threshold:
            return SignalStrength(label)
    return SignalStrength.STRONG_SELL


def classify_signal_type(score: float) -> str:
    if score >= SIGNAL_TYPE_THRESHOLDS['bullish']:
        return 'bullish'
    if score < SIGNAL_TYPE_THRESHOLDS['bearish']:
        return 'bearish'
    return 'neutral'


def classify_data_quality(timeframe_count: int) -> str:
    for minimum, label in DATA_QUALITY_LABELS:
        if timeframe_count >= minimum:
            return label
    return 'insufficient'


class SignalAggregator:
    """Multi-timeframe aggregation with fixed, re-normalized timeframe weights."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now, with_text: bool = True):
        """
        Args:
            clock: Source of "now" for expiry timestamps
            with_text: Generate recommendation/analysis strings
        """
        self.clock = clock
        self.with_text = with_text

    @staticmethod
    def _present(timeframe_scores: Dict[str, TimeframeScore]) -> List[Tuple[str, TimeframeScore]]:
        """Known timeframes that have a score, highest weight first."""
        return [
            (tf, timeframe_scores[tf])
            for tf in TIMEFRAME_WEIGHTS
            if tf in timeframe_scores
        ]

    def calculate_final_score(self, timeframe_scores: Dict[str, TimeframeScore]) -> float:
        """
        Weighted average of composites over the timeframes present.

        Returns NEUTRAL_SCORE when no timeframe is present.
        """
        present = self._present(timeframe_scores)
        weight_sum = sum(TIMEFRAME_WEIGHTS[tf] for tf, _ in present)
        if weight_sum <= 0:
            return float(NEUTRAL_SCORE)
        weighted = sum(score.composite_score * TIMEFRAME_WEIGHTS[tf] for tf, score in present)
        return clamp(round_half_up(weighted / weight_sum))

    def calculate_confidence(self, timeframe_scores: Dict[str, TimeframeScore]) -> float:
        present = self._present(timeframe_scores)
        if not present:
            return 0.0
        return clamp(round_half_up(sum(s.confidence for _, s in present) / len(present)))

    @staticmethod
    def calculate_risk_levels(
        entry_price: float, final_score: float, strength: SignalStrength
    ) -> Tuple[float, float, float]:
        """
        Baseline stop-loss/take-profit below and above the entry.

        Returns:
            (stop_loss, take_profit, risk_reward_ratio)
        """
        stop_pct = STOP_LOSS_PCT['strong'] if strength.is_strong else STOP_LOSS_PCT['default']
        multiplier = DEFAULT_REWARD_MULTIPLIER
        for threshold, value in REWARD_MULTIPLIERS:
            if final_score >= threshold:
                multiplier = value
                break

        stop_loss = entry_price * (1 - stop_pct)
        take_profit = entry_price + (entry_price - stop_loss) * multiplier
        return stop_loss, take_profit, multiplier

    def aggregate(
        self,
        ticker: str,
        timeframe_scores: Dict[str, TimeframeScore],
        entry_price: float,
    ) -> FinalSignalScore:
        present = dict(self._present(timeframe_scores))
        final_score = self.calculate_final_score(present)
        strength = classify_strength(final_score)
        confidence = self.calculate_confidence(present)
        stop_loss, take_profit, rr = self.calculate_risk_levels(entry_price, final_score, strength)

        recommendation = analysis = ""
        if self.with_text:
            recommendation = explanations.build_recommendation(strength)
            analysis = explanations.build_analysis(
                final_score, strength, confidence, present,
                entry_price, stop_loss, take_profit, rr,
            )

        return FinalSignalScore(
            ticker=ticker,
            final_score=final_score,
            strength=strength,
            timeframe_scores=present,
            confidence=confidence,
            recommendation=recommendation,
            entry_price=entry_price,
            stop_loss=stop_loss,
            take_profit=take_profit,
            risk_reward_ratio=rr,
            expires_at=self.clock() + timedelta(hours=SIGNAL_EXPIRY_HOURS),
            analysis=analysis,
        )


def to_processed_signal(
    score: FinalSignalScore,
    info: TickerInfo,
    synthetic_timeframes: Optional[List[str]] = None,
) -> ProcessedSignal:
    """
    Project a FinalSignalScore into the persisted signal shape.

    created_at is derived from expires_at so the 24h window holds exactly.
    """
    synthetic = sorted(synthetic_timeframes or [])
    return ProcessedSignal(
        ticker=score.ticker,
        company_name=info.company_name,
        sector=info.sector,
        market=info.market,
        signal_type=classify_signal_type(score.final_score),
        strength=score.strength,
        final_score=score.final_score,
        confidence=score.confidence,
        timeframe_scores={tf: ts.composite_score for tf, ts in score.timeframe_scores.items()},
        entry_price=score.entry_price,
        stop_loss=score.stop_loss,
        take_profit=score.take_profit,
        risk_reward_ratio=score.risk_reward_ratio,
        recommendation=score.recommendation,
        analysis=score.analysis,
        data_quality=classify_data_quality(len(score.timeframe_scores)),
        data_provenance='synthetic' if synthetic else 'real',
        synthetic_timeframes=synthetic,
        status='active',
        created_at=score.expires_at - timedelta(hours=SIGNAL_EXPIRY_HOURS),
        expires_at=score.expires_at,
    )
