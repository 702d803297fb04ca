"""
Centralized constants for the application.
Stores API base URLs, timeouts, and other magic numbers.
"""

from typing import Dict

# --- API Configuration ---

# Polygon.io
POLYGON_BASE_URL = "https://api.polygon.io"
POLYGON_TIMEOUT_SECONDS = 10
POLYGON_RETRIES = 3

# Yahoo Finance (yfinance)
YAHOO_TIMEOUT_SECONDS = 20

# --- Data Directory Paths (relative to project root) ---
DATA_SIGNALS = "data/signals"                 # Persisted signal documents
DATA_REPORTS = "generated_reports"            # Human-readable run reports

# --- API Endpoints ---
POLYGON_ENDPOINTS: Dict[str, str] = {
    'tickers': '/v3/reference/tickers',
    'snapshot': '/v2/snapshot/locale/us/markets/stocks/tickers/{ticker}',
    'aggregates': '/v2/aggs/ticker/{ticker}/range/{multiplier}/{timespan}/{start}/{end}',
}

# yfinance download parameters per timeframe; 4H is resampled from 1h bars
YAHOO_INTERVALS: Dict[str, Dict[str, str]] = {
    '1H': {'interval': '1h', 'period': '60d'},
    '4H': {'interval': '1h', 'period': '730d', 'resample': '4h'},
    '1D': {'interval': '1d', 'period': '2y'},
    '1W': {'interval': '1wk', 'period': '5y'},
}
