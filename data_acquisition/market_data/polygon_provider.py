"""
Polygon.io market-data provider.
Uses the reference tickers, snapshot and aggregates REST endpoints.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from config.settings import settings
from config.constants import POLYGON_BASE_URL, POLYGON_ENDPOINTS, POLYGON_TIMEOUT_SECONDS, POLYGON_RETRIES
from config.pipeline_config import TIMEFRAME_CONFIG
from utils.http_utils import make_request
from utils.logger import setup_logger
from utils.numeric_utils import clean_numeric
from signal_engine.errors import ProviderUnavailableError
from signal_engine.models import PriceBar, Quote
from .base_provider import MarketDataProvider, ProviderRegistry

logger = setup_logger('polygon_provider')


class PolygonProvider(MarketDataProvider):
    """Fetches tickers, quotes and aggregates from Polygon.io."""

    source_name = "polygon"

    def __init__(self, base_url: str = POLYGON_BASE_URL):
        self.base_url = base_url.rstrip('/')
        if not settings.has_polygon_key():
            logger.warning("POLYGON_API_KEY not set; Polygon requests will raise ProviderUnavailableError")

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """
        GET a Polygon endpoint, moving on to the next configured key when
        a request fails. Each key is tried at most once.

        Raises:
            ProviderUnavailableError: if no API key is configured
        """
        key_count = settings.manager.get_key_count('POLYGON')
        if key_count == 0:
            raise ProviderUnavailableError("POLYGON_API_KEY is not configured")
        for _ in range(key_count):
            seen_index = settings.manager.current_index
            query = dict(params or {})
            query['apiKey'] = settings.POLYGON_API_KEY
            data = make_request(
                f"{self.base_url}{path}",
                params=query,
                timeout=POLYGON_TIMEOUT_SECONDS,
                retries=POLYGON_RETRIES,
                source_name="Polygon",
            )
            if isinstance(data, dict):
                return data
            if key_count > 1:
                settings.rotate_keys(seen_index)
        return None

    def list_active_tickers(self, limit: int) -> Optional[List[str]]:
        data = self._get(
            POLYGON_ENDPOINTS['tickers'],
            {'market': 'stocks', 'active': 'true', 'limit': min(max(limit, 1), 1000)},
        )
        if data is None:
            return None
        tickers = [row['ticker'] for row in data.get('results') or [] if row.get('ticker')]
        logger.info(f"Discovered {len(tickers)} active tickers")
        return tickers[:limit]

    def get_latest_quote(self, ticker: str) -> Optional[Quote]:
        data = self._get(POLYGON_ENDPOINTS['snapshot'].format(ticker=ticker))
        if data is None or not data.get('ticker'):
            return None

        snapshot = data['ticker']
        day = snapshot.get('day') or {}
        prev_day = snapshot.get('prevDay') or {}
        last_trade = snapshot.get('lastTrade') or {}

        price = clean_numeric(last_trade.get('p')) or clean_numeric(day.get('c')) or clean_numeric(prev_day.get('c'))
        if price is None:
            logger.warning(f"No price in Polygon snapshot for {ticker}")
            return None

        return Quote(
            ticker=ticker,
            price=price,
            volume=clean_numeric(day.get('v')) or clean_numeric(prev_day.get('v')) or 0.0,
            change_percent=clean_numeric(snapshot.get('todaysChangePerc')) or 0.0,
            open=clean_numeric(day.get('o')),
            high=clean_numeric(day.get('h')),
            low=clean_numeric(day.get('l')),
        )

    def get_ohlcv(self, ticker: str, timeframe: str, periods: int) -> Optional[List[PriceBar]]:
        config = TIMEFRAME_CONFIG.get(timeframe)
        if config is None:
            logger.error(f"Unsupported timeframe {timeframe}")
            return None

        end = datetime.now(timezone.utc).date()
        start = end - timedelta(days=config['lookback_days'])
        path = POLYGON_ENDPOINTS['aggregates'].format(
            ticker=ticker,
            multiplier=config['multiplier'],
            timespan=config['timespan'],
            start=start.isoformat(),
            end=end.isoformat(),
        )
        data = self._get(path, {'adjusted': 'true', 'sort': 'asc', 'limit': 5000})
        if data is None:
            return None

        bars = []
        for row in data.get('results') or []:
            timestamp = clean_numeric(row.get('t'))
            if timestamp is None:
                continue
            bar = self._make_bar(
                datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc),
                row.get('o'), row.get('h'), row.get('l'), row.get('c'), row.get('v'),
            )
            if bar is not None:
                bars.append(bar)

        logger.debug(f"Polygon returned {len(bars)} {timeframe} bars for {ticker}")
        return bars[-periods:] if periods > 0 else bars


ProviderRegistry.register('polygon', PolygonProvider)
