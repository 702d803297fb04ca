"""
Indicator result models.

One model per indicator, tagged by `kind`. An indicator that cannot be
computed yields None instead of a result; scorers read None as neutral.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

Tier = Literal['strong', 'moderate', 'weak']
Direction = Literal['bullish', 'bearish', 'neutral']


class _IndicatorResult(BaseModel):
    model_config = ConfigDict(frozen=True)


class RSIResult(_IndicatorResult):
    kind: Literal['rsi'] = 'rsi'
    value: float = Field(..., ge=0, le=100)
    signal: Literal['oversold', 'neutral', 'overbought']
    strength: Tier


class MACDResult(_IndicatorResult):
    kind: Literal['macd'] = 'macd'
    macd: float
    signal_line: float
    histogram: float
    trend: Direction
    crossover: Optional[Literal['bullish', 'bearish']] = None


class EMAPairResult(_IndicatorResult):
    kind: Literal['ema_pair'] = 'ema_pair'
    ema_fast: float
    ema_slow: float
    price: float
    alignment: Direction
    price_position: Literal['above_both', 'below_both', 'between']
    cross: Optional[Literal['golden_cross', 'death_cross']] = None
    strength: Tier
    spread_pct: float = Field(..., description="|EMA fast - EMA slow| / EMA slow, in percent")


class BollingerResult(_IndicatorResult):
    kind: Literal['bollinger'] = 'bollinger'
    upper: float
    middle: float
    lower: float
    percent_b: float
    bandwidth: float
    average_bandwidth: float
    squeeze: bool = False
    expansion: bool = False
    position: Literal['above_upper', 'near_upper', 'middle', 'near_lower', 'below_lower']
    signal: Literal['bullish_breakout', 'bearish_breakout', 'overbought', 'oversold', 'squeeze', 'neutral']


class VolumeResult(_IndicatorResult):
    kind: Literal['volume'] = 'volume'
    current_volume: float
    average_volume: float
    ratio: float
    spike: bool
    trend: Literal['increasing', 'decreasing', 'stable']
    signal: Direction


class PriceLevel(_IndicatorResult):
    price: float
    level_type: Literal['support', 'resistance']
    touches: int
    strength: float


class SupportResistanceResult(_IndicatorResult):
    kind: Literal['support_resistance'] = 'support_resistance'
    price: float
    nearest_support: Optional[float] = None
    nearest_resistance: Optional[float] = None
    support_touches: int = 0
    resistance_touches: int = 0
    support_strength: float = 0.0
    resistance_strength: float = 0.0
    position_in_range: float = Field(..., ge=0, le=100)
    signal: Literal['at_support', 'at_resistance', 'breakout', 'in_range']
    levels: List[PriceLevel] = Field(default_factory=list)


class IndicatorSet(BaseModel):
    """Indicator readings for one timeframe; None marks insufficient data."""
    rsi: Optional[RSIResult] = None
    macd: Optional[MACDResult] = None
    ema_pair: Optional[EMAPairResult] = None
    bollinger: Optional[BollingerResult] = None
    volume: Optional[VolumeResult] = None
    support_resistance: Optional[SupportResistanceResult] = None
