"""
Static seed universe.

Used when ticker discovery is unavailable, and as the metadata catalog
(company, sector, market) for discovered tickers.
"""

from typing import Dict, List

from signal_engine.models import TickerInfo

# (ticker, company name, sector)
_SEED_ROWS = [
    ('AAPL', 'Apple Inc.', 'Technology'),
    ('MSFT', 'Microsoft Corporation', 'Technology'),
    ('NVDA', 'NVIDIA Corporation', 'Technology'),
    ('AMD', 'Advanced Micro Devices, Inc.', 'Technology'),
    ('ORCL', 'Oracle Corporation', 'Technology'),
    ('CRM', 'Salesforce, Inc.', 'Technology'),
    ('GOOGL', 'Alphabet Inc.', 'Communication Services'),
    ('META', 'Meta Platforms, Inc.', 'Communication Services'),
    ('NFLX', 'Netflix, Inc.', 'Communication Services'),
    ('DIS', 'The Walt Disney Company', 'Communication Services'),
    ('AMZN', 'Amazon.com, Inc.', 'Consumer Discretionary'),
    ('TSLA', 'Tesla, Inc.', 'Consumer Discretionary'),
    ('HD', 'The Home Depot, Inc.', 'Consumer Discretionary'),
    ('NKE', 'NIKE, Inc.', 'Consumer Discretionary'),
    ('JPM', 'JPMorgan Chase & Co.', 'Financials'),
    ('BAC', 'Bank of America Corporation', 'Financials'),
    ('V', 'Visa Inc.', 'Financials'),
    ('GS', 'The Goldman Sachs Group, Inc.', 'Financials'),
    ('JNJ', 'Johnson & Johnson', 'Healthcare'),
    ('UNH', 'UnitedHealth Group Incorporated', 'Healthcare'),
    ('PFE', 'Pfizer Inc.', 'Healthcare'),
    ('LLY', 'Eli Lilly and Company', 'Healthcare'),
    ('XOM', 'Exxon Mobil Corporation', 'Energy'),
    ('CVX', 'Chevron Corporation', 'Energy'),
    ('WMT', 'Walmart Inc.', 'Consumer Staples'),
    ('KO', 'The Coca-Cola Company', 'Consumer Staples'),
    ('PG', 'The Procter & Gamble Company', 'Consumer Staples'),
    ('CAT', 'Caterpillar Inc.', 'Industrials'),
    ('BA', 'The Boeing Company', 'Industrials'),
    ('NEE', 'NextEra Energy, Inc.', 'Utilities'),
]

SEED_UNIVERSE: List[TickerInfo] = [
    TickerInfo(ticker=ticker, company_name=name, sector=sector, market='usa')
    for ticker, name, sector in _SEED_ROWS
]

# Sector given to tickers outside the catalog
UNKNOWN_SECTOR = "Unknown"

_CATALOG: Dict[str, TickerInfo] = {info.ticker: info for info in SEED_UNIVERSE}


def seed_tickers(limit: int) -> List[str]:
    return [info.ticker for info in SEED_UNIVERSE[:limit]]


def lookup_ticker_info(ticker: str) -> TickerInfo:
    """Catalog metadata for `ticker`, or placeholder metadata if unknown."""
    info = _CATALOG.get(ticker.upper())
    if info is not None:
        return info
    return TickerInfo(ticker=ticker, company_name=ticker, sector=UNKNOWN_SECTOR)
