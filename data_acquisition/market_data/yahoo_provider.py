"""
Yahoo Finance market-data provider (yfinance).
Default provider: needs no API key. 4H bars are resampled from 1h history.
"""

from typing import List, Optional

import pandas as pd
import yfinance as yf

from config.constants import YAHOO_INTERVALS, YAHOO_TIMEOUT_SECONDS
from utils.logger import setup_logger
from utils.numeric_utils import clean_numeric
from signal_engine.models import PriceBar, Quote
from .base_provider import MarketDataProvider, ProviderRegistry

logger = setup_logger('yahoo_provider')

RESAMPLE_RULES = {
    'Open': 'first',
    'High': 'max',
    'Low': 'min',
    'Close': 'last',
    'Volume': 'sum',
}


class YahooProvider(MarketDataProvider):
    """Fetches quotes and OHLCV history from Yahoo Finance."""

    source_name = "yahoo"

    def list_active_tickers(self, limit: int) -> Optional[List[str]]:
        try:
            response = yf.screen('most_actives', count=min(max(limit, 1), 250))
            tickers = [row['symbol'] for row in response.get('quotes', []) if row.get('symbol')]
            logger.info(f"Discovered {len(tickers)} most-active tickers")
            return tickers[:limit]
        except Exception as e:
            logger.error(f"Failed to list active tickers from Yahoo: {e}")
            return None

    def get_latest_quote(self, ticker: str) -> Optional[Quote]:
        try:
            hist = yf.Ticker(ticker).history(period='5d', interval='1d', timeout=YAHOO_TIMEOUT_SECONDS)
        except Exception as e:
            logger.error(f"Failed to fetch quote for {ticker} from Yahoo: {e}")
            return None

        hist = hist.dropna(subset=['Close']) if not hist.empty else hist
        if hist.empty:
            logger.warning(f"No recent prices for {ticker} on Yahoo")
            return None

        latest = hist.iloc[-1]
        price = clean_numeric(latest['Close'])
        if price is None:
            return None

        change_percent = 0.0
        if len(hist) > 1:
            prev_close = clean_numeric(hist['Close'].iloc[-2])
            if prev_close:
                change_percent = (price - prev_close) / prev_close * 100

        return Quote(
            ticker=ticker,
            price=price,
            volume=clean_numeric(latest.get('Volume')) or 0.0,
            change_percent=round(change_percent, 4),
            open=clean_numeric(latest.get('Open')),
            high=clean_numeric(latest.get('High')),
            low=clean_numeric(latest.get('Low')),
        )

    def get_ohlcv(self, ticker: str, timeframe: str, periods: int) -> Optional[List[PriceBar]]:
        params = YAHOO_INTERVALS.get(timeframe)
        if params is None:
            logger.error(f"Unsupported timeframe {timeframe}")
            return None

        try:
            hist = yf.Ticker(ticker).history(
                period=params['period'], interval=params['interval'], timeout=YAHOO_TIMEOUT_SECONDS
            )
        except Exception as e:
            logger.error(f"Failed to fetch {timeframe} history for {ticker} from Yahoo: {e}")
            return None

        if hist.empty:
            return []

        if params.get('resample'):
            hist = resample_ohlcv(hist, params['resample'])

        bars = []
        for date, row in hist.iterrows():
            bar = self._make_bar(
                pd.Timestamp(date).to_pydatetime(),
                row.get('Open'), row.get('High'), row.get('Low'), row.get('Close'), row.get('Volume'),
            )
            if bar is not None:
                bars.append(bar)

        logger.debug(f"Yahoo returned {len(bars)} {timeframe} bars for {ticker}")
        return bars[-periods:] if periods > 0 else bars


def resample_ohlcv(hist: pd.DataFrame, rule: str) -> pd.DataFrame:
    """Aggregate a Yahoo history frame into coarser bars."""
    columns = {col: how for col, how in RESAMPLE_RULES.items() if col in hist.columns}
    return hist.resample(rule).agg(columns).dropna(subset=['Close'])


ProviderRegistry.register('yahoo', YahooProvider)
