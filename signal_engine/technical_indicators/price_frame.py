"""
Conversions from PriceBar sequences and raw price lists into pandas objects.
"""

from typing import Iterable, List, Sequence, Union
import pandas as pd

from signal_engine.models import PriceBar

PriceInput = Union[Sequence[float], pd.Series]


def to_close_series(prices: PriceInput) -> pd.Series:
    """Float series with missing values dropped and a fresh integer index."""
    series = pd.Series(prices, dtype='float64')
    return series.dropna().reset_index(drop=True)


def bars_to_dataframe(bars: Iterable[PriceBar]) -> pd.DataFrame:
    """
    Build the OHLCV frame used by the bar-based indicators.

    Args:
        bars: PriceBar sequence in any order

    Returns:
        DataFrame with columns: date, open, high, low, close, volume,
        sorted chronologically
    """
    rows: List[dict] = [
        {
            'date': bar.timestamp,
            'open': bar.open,
            'high': bar.high,
            'low': bar.low,
            'close': bar.close,
            'volume': bar.volume,
        }
        for bar in bars
    ]
    df = pd.DataFrame(rows, columns=['date', 'open', 'high', 'low', 'close', 'volume'])
    if df.empty:
        return df
    df['date'] = pd.to_datetime(df['date'], utc=True).dt.tz_localize(None)
    return df.sort_values('date').reset_index(drop=True)


def as_frame(bars: Union[Iterable[PriceBar], pd.DataFrame]) -> pd.DataFrame:
    """Accept either a prepared OHLCV frame or a PriceBar sequence."""
    if isinstance(bars, pd.DataFrame):
        return bars
    return bars_to_dataframe(bars)
