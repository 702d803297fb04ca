"""Builders for bar series and scores shared by the test modules."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from signal_engine.models import PriceBar, TimeframeScore

START = datetime(2024, 1, 2, tzinfo=timezone.utc)


def make_bars(
    closes: Sequence[float],
    volumes: Optional[Sequence[float]] = None,
    spread: float = 0.5,
    step: timedelta = timedelta(days=1),
    flat_open: bool = False,
) -> List[PriceBar]:
    """
    Bars with open at the previous close and high/low `spread` beyond the body.
    With flat_open the open equals the close, so high/low sit at close +/- spread.
    """
    volumes = volumes if volumes is not None else [1_000_000] * len(closes)
    bars = []
    for i, close in enumerate(closes):
        open_ = closes[i - 1] if i > 0 and not flat_open else close
        bars.append(PriceBar(
            timestamp=START + step * i,
            open=open_,
            high=max(open_, close) + spread,
            low=min(open_, close) - spread,
            close=close,
            volume=volumes[i],
        ))
    return bars


def trending_closes(n: int = 120, start: float = 100.0, step: float = 0.5) -> List[float]:
    return [start + step * i for i in range(n)]


def make_timeframe_score(
    timeframe: str, composite: float, confidence: float = 80.0, indicators_available: int = 6,
) -> TimeframeScore:
    return TimeframeScore(
        timeframe=timeframe,
        scores={},
        composite_score=composite,
        confidence=confidence,
        indicators_available=indicators_available,
    )
