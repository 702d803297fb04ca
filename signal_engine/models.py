"""
Data models for the signal engine.

PriceBar series and per-timeframe scores are recomputed on every run.
FinalSignalScore/ProcessedSignal are produced once per run and never
mutated by the engine afterwards; only consumers change `status`.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.pipeline_config import PIPELINE_DEFAULTS, TIMEFRAME_CONFIG, DEFAULT_TIMEFRAMES


class SignalStrength(str, Enum):
    STRONG_BUY = "STRONG_BUY"
    BUY = "BUY"
    WEAK_BUY = "WEAK_BUY"
    NEUTRAL = "NEUTRAL"
    WEAK_SELL = "WEAK_SELL"
    SELL = "SELL"
    STRONG_SELL = "STRONG_SELL"

    @property
    def is_strong(self) -> bool:
        return self in (SignalStrength.STRONG_BUY, SignalStrength.STRONG_SELL)


SignalType = Literal['bullish', 'bearish', 'neutral']
SignalStatus = Literal['active', 'expired', 'triggered', 'cancelled']
DataProvenance = Literal['real', 'synthetic']


# =============================================================================
# MARKET DATA
# =============================================================================

class PriceBar(BaseModel):
    """One OHLCV interval."""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


class Quote(BaseModel):
    """Latest quote for a ticker."""
    ticker: str
    price: float
    volume: float = 0.0
    change_percent: float = 0.0
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None


class TickerInfo(BaseModel):
    """Static metadata attached to a persisted signal."""
    ticker: str
    company_name: str
    sector: str = "Unknown"
    market: str = "usa"


# =============================================================================
# SCORES
# =============================================================================

class IndicatorScore(BaseModel):
    name: str
    score: float = Field(..., ge=0, le=100)
    weight: float
    contribution: float
    reason: str = ""


class TimeframeScore(BaseModel):
    timeframe: str
    scores: Dict[str, IndicatorScore]
    composite_score: float = Field(..., ge=0, le=100)
    confidence: float = Field(..., ge=0, le=100)
    # Indicators that had enough history; 0 means the timeframe carries no signal
    indicators_available: int = Field(0, ge=0)


class FinalSignalScore(BaseModel):
    ticker: str
    final_score: float = Field(..., ge=0, le=100)
    strength: SignalStrength
    timeframe_scores: Dict[str, TimeframeScore] = Field(default_factory=dict)
    confidence: float = Field(..., ge=0, le=100)
    recommendation: str = ""
    entry_price: float
    stop_loss: float
    take_profit: float
    risk_reward_ratio: float
    expires_at: datetime
    analysis: str = ""


class ProcessedSignal(BaseModel):
    """Persisted projection of a FinalSignalScore plus ticker metadata."""
    ticker: str
    company_name: str
    sector: str
    market: str
    signal_type: SignalType
    strength: SignalStrength
    final_score: float
    confidence: float
    timeframe_scores: Dict[str, float] = Field(
        default_factory=dict, description="Composite score per timeframe"
    )
    entry_price: float
    stop_loss: float
    take_profit: float
    risk_reward_ratio: float
    recommendation: str = ""
    analysis: str = ""
    data_quality: Literal['excellent', 'good', 'limited', 'insufficient']
    data_provenance: DataProvenance = 'real'
    synthetic_timeframes: List[str] = Field(default_factory=list)
    status: SignalStatus = 'active'
    created_at: datetime
    expires_at: datetime


# =============================================================================
# RISK
# =============================================================================

class SetupValidation(BaseModel):
    """Advisory validation; never blocks a trade setup."""
    is_valid: bool
    issues: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class RiskManagementData(BaseModel):
    entry_price: float
    stop_loss: float
    take_profit: float
    risk_reward_ratio: float
    position_size: int
    risk_amount: float
    potential_profit: float
    potential_loss: float
    risk_level: Literal['low', 'medium', 'high']
    validation: SetupValidation


# =============================================================================
# PIPELINE
# =============================================================================

class GenerationRequest(BaseModel):
    max_signals: int = Field(PIPELINE_DEFAULTS["MAX_SIGNALS"], ge=1)
    min_score: float = Field(PIPELINE_DEFAULTS["MIN_SCORE"], ge=0, le=100)
    sectors: List[str] = Field(default_factory=list, description="Empty means all sectors")
    markets: List[str] = Field(default_factory=list, description="Empty means all markets")
    timeframes: List[str] = Field(default_factory=lambda: list(DEFAULT_TIMEFRAMES))

    @field_validator('timeframes')
    @classmethod
    def _known_timeframes(cls, value: List[str]) -> List[str]:
        normalized = [tf.upper() for tf in value]
        unknown = [tf for tf in normalized if tf not in TIMEFRAME_CONFIG]
        if unknown:
            raise ValueError(f"Unknown timeframes: {', '.join(unknown)}")
        if not normalized:
            raise ValueError("At least one timeframe is required")
        return normalized


class PipelineStats(BaseModel):
    """Aggregate counters for one generation run."""
    tickers_discovered: int = 0
    used_seed_universe: bool = False
    quotes_fetched: int = 0
    tickers_skipped: int = 0
    tickers_filtered_out: int = 0
    synthetic_series: int = 0
    insufficient_timeframes: int = 0
    signals_scored: int = 0
    below_min_score: int = 0
    signals_persisted: int = 0
    persistence_failures: int = 0
    errors: List[str] = Field(default_factory=list)
    duration_seconds: float = 0.0
