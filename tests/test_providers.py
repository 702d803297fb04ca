"""Tests for the market-data providers and the synthetic history fallback."""
import sys
import os
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import numpy as np
import pandas as pd

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import settings
from signal_engine.errors import ProviderUnavailableError
from data_acquisition.market_data import (
    ProviderRegistry,
    PolygonProvider,
    YahooProvider,
    generate_synthetic_bars,
    lookup_ticker_info,
    seed_tickers,
)

YF_TICKER = 'data_acquisition.market_data.yahoo_provider.yf.Ticker'
YF_SCREEN = 'data_acquisition.market_data.yahoo_provider.yf.screen'
MAKE_REQUEST = 'data_acquisition.market_data.polygon_provider.make_request'


def hourly_frame(n=8, start='2024-01-02 08:00'):
    index = pd.date_range(start, periods=n, freq='h', tz='UTC')
    closes = [100.0 + i for i in range(n)]
    return pd.DataFrame({
        'Open': [c - 0.5 for c in closes],
        'High': [c + 1.0 for c in closes],
        'Low': [c - 1.0 for c in closes],
        'Close': closes,
        'Volume': [1000] * n,
    }, index=index)


# ────────────────────────────────────────────────────────────────────────────
# Yahoo
# ────────────────────────────────────────────────────────────────────────────

class TestYahooProvider(unittest.TestCase):

    def setUp(self):
        self.provider = YahooProvider()

    @patch(YF_TICKER)
    def test_four_hour_bars_are_resampled(self, mock_ticker):
        mock_ticker.return_value.history.return_value = hourly_frame()
        bars = self.provider.get_ohlcv('AAPL', '4H', 100)

        self.assertEqual(len(bars), 2)
        self.assertEqual(bars[0].open, 99.5)
        self.assertEqual(bars[0].close, 103.0)
        self.assertEqual(bars[0].high, 104.0)
        self.assertEqual(bars[0].low, 99.0)
        self.assertEqual(bars[0].volume, 4000)
        self.assertEqual(bars[1].close, 107.0)
        _, kwargs = mock_ticker.return_value.history.call_args
        self.assertEqual(kwargs['interval'], '1h')

    @patch(YF_TICKER)
    def test_history_is_trimmed_to_periods(self, mock_ticker):
        mock_ticker.return_value.history.return_value = hourly_frame(n=30)
        bars = self.provider.get_ohlcv('AAPL', '1H', 10)
        self.assertEqual(len(bars), 10)
        self.assertEqual(bars[-1].close, 129.0)
        self.assertLess(bars[0].timestamp, bars[-1].timestamp)

    @patch(YF_TICKER)
    def test_empty_history_is_empty_list(self, mock_ticker):
        mock_ticker.return_value.history.return_value = pd.DataFrame()
        self.assertEqual(self.provider.get_ohlcv('ZZZZ', '1D', 100), [])

    @patch(YF_TICKER)
    def test_history_error_is_unavailable(self, mock_ticker):
        mock_ticker.return_value.history.side_effect = ConnectionError("timeout")
        self.assertIsNone(self.provider.get_ohlcv('AAPL', '1D', 100))

    def test_unknown_timeframe(self):
        self.assertIsNone(self.provider.get_ohlcv('AAPL', '15M', 100))

    @patch(YF_TICKER)
    def test_latest_quote(self, mock_ticker):
        frame = pd.DataFrame({
            'Open': [99.0, 101.0], 'High': [101.0, 111.0], 'Low': [98.0, 100.0],
            'Close': [100.0, 110.0], 'Volume': [2_000_000, 3_500_000],
        }, index=pd.date_range('2024-01-02', periods=2, freq='D'))
        mock_ticker.return_value.history.return_value = frame

        quote = self.provider.get_latest_quote('AAPL')
        self.assertEqual(quote.price, 110.0)
        self.assertEqual(quote.volume, 3_500_000)
        self.assertAlmostEqual(quote.change_percent, 10.0)

    @patch(YF_TICKER)
    def test_quote_without_prices_is_unavailable(self, mock_ticker):
        mock_ticker.return_value.history.return_value = pd.DataFrame()
        self.assertIsNone(self.provider.get_latest_quote('ZZZZ'))

    @patch(YF_SCREEN)
    def test_discovery(self, mock_screen):
        mock_screen.return_value = {'quotes': [{'symbol': 'TSLA'}, {'symbol': 'NVDA'}, {}]}
        self.assertEqual(self.provider.list_active_tickers(10), ['TSLA', 'NVDA'])

    @patch(YF_SCREEN)
    def test_discovery_failure_is_unavailable(self, mock_screen):
        mock_screen.side_effect = RuntimeError("screener offline")
        self.assertIsNone(self.provider.list_active_tickers(10))


# ────────────────────────────────────────────────────────────────────────────
# Polygon
# ────────────────────────────────────────────────────────────────────────────

class TestPolygonProvider(unittest.TestCase):

    def setUp(self):
        key_patch = patch.dict(settings.manager._keys, {'POLYGON': ['test-key']})
        index_patch = patch.object(settings.manager, '_index', 0)
        key_patch.start()
        index_patch.start()
        self.addCleanup(key_patch.stop)
        self.addCleanup(index_patch.stop)
        self.provider = PolygonProvider()

    @patch(MAKE_REQUEST)
    def test_aggregates_become_bars(self, mock_request):
        mock_request.return_value = {'results': [
            {'t': 1704204000000, 'o': 10.0, 'h': 11.0, 'l': 9.5, 'c': 10.5, 'v': 12000},
            {'t': 1704207600000, 'o': 10.5, 'h': 10.8, 'l': 10.1, 'c': 10.2, 'v': 8000},
            {'o': 1.0, 'c': 1.0},
        ]}
        bars = self.provider.get_ohlcv('AAPL', '1H', 100)

        self.assertEqual(len(bars), 2)
        self.assertEqual(bars[0].timestamp, datetime(2024, 1, 2, 14, 0, tzinfo=timezone.utc))
        self.assertEqual(bars[1].close, 10.2)
        url = mock_request.call_args[0][0]
        self.assertIn('/v2/aggs/ticker/AAPL/range/1/hour/', url)
        self.assertEqual(mock_request.call_args[1]['params']['apiKey'], 'test-key')

    @patch(MAKE_REQUEST)
    def test_failed_request_is_unavailable(self, mock_request):
        mock_request.return_value = None
        self.assertIsNone(self.provider.get_ohlcv('AAPL', '1D', 100))
        self.assertIsNone(self.provider.get_latest_quote('AAPL'))
        self.assertIsNone(self.provider.list_active_tickers(10))

    @patch(MAKE_REQUEST)
    def test_snapshot_quote_falls_back_to_previous_day_volume(self, mock_request):
        mock_request.return_value = {'ticker': {
            'lastTrade': {'p': 187.5},
            'day': {'c': 0, 'v': 0},
            'prevDay': {'c': 185.0, 'v': 5_000_000},
            'todaysChangePerc': 1.35,
        }}
        quote = self.provider.get_latest_quote('AAPL')
        self.assertEqual(quote.price, 187.5)
        self.assertEqual(quote.volume, 5_000_000)
        self.assertEqual(quote.change_percent, 1.35)

    @patch(MAKE_REQUEST)
    def test_ticker_discovery(self, mock_request):
        mock_request.return_value = {'results': [{'ticker': 'AAPL'}, {'ticker': 'MSFT'}, {'name': 'x'}]}
        self.assertEqual(self.provider.list_active_tickers(1), ['AAPL'])

    @patch(MAKE_REQUEST)
    def test_rotates_to_next_key_after_failure(self, mock_request):
        mock_request.side_effect = [None, {'results': [{'ticker': 'AAPL'}]}]
        with patch.dict(settings.manager._keys, {'POLYGON': ['first-key', 'second-key']}):
            tickers = self.provider.list_active_tickers(5)

        self.assertEqual(tickers, ['AAPL'])
        used_keys = [c[1]['params']['apiKey'] for c in mock_request.call_args_list]
        self.assertEqual(used_keys, ['first-key', 'second-key'])

    @patch(MAKE_REQUEST)
    def test_missing_key_is_unavailable(self, mock_request):
        with patch.dict(settings.manager._keys, {'POLYGON': []}):
            with self.assertRaises(ProviderUnavailableError):
                self.provider.get_latest_quote('AAPL')
        mock_request.assert_not_called()


# ────────────────────────────────────────────────────────────────────────────
# Registry, seed universe, synthetic history
# ────────────────────────────────────────────────────────────────────────────

class TestProviderRegistry(unittest.TestCase):

    def test_registered_sources(self):
        self.assertIn('yahoo', ProviderRegistry.available_sources())
        self.assertIn('polygon', ProviderRegistry.available_sources())
        self.assertIsInstance(ProviderRegistry.create('yahoo'), YahooProvider)

    def test_unknown_source(self):
        with self.assertRaises(ValueError):
            ProviderRegistry.create('bloomberg')


class TestSeedUniverse(unittest.TestCase):

    def test_seed_limit(self):
        self.assertEqual(len(seed_tickers(5)), 5)
        self.assertEqual(len(seed_tickers(500)), 30)

    def test_lookup(self):
        self.assertEqual(lookup_ticker_info('xom').sector, 'Energy')
        unknown = lookup_ticker_info('QQQQ')
        self.assertEqual(unknown.company_name, 'QQQQ')
        self.assertEqual(unknown.sector, 'Unknown')


class TestSyntheticSeries(unittest.TestCase):

    END = datetime(2024, 6, 3, tzinfo=timezone.utc)

    def test_last_close_is_anchor(self):
        bars = generate_synthetic_bars(187.4321, '1D', end=self.END, rng=np.random.default_rng(1))
        self.assertEqual(len(bars), 50)
        self.assertEqual(bars[-1].close, 187.4321)
        self.assertEqual(bars[-1].timestamp, self.END)

    def test_bars_are_consistent(self):
        bars = generate_synthetic_bars(50.0, '4H', periods=80, end=self.END, rng=np.random.default_rng(2))
        for bar in bars:
            self.assertGreaterEqual(bar.high, max(bar.open, bar.close))
            self.assertLessEqual(bar.low, min(bar.open, bar.close))
            self.assertGreater(bar.low, 0)
        steps = {b.timestamp - a.timestamp for a, b in zip(bars, bars[1:])}
        self.assertEqual(steps, {timedelta(hours=4)})

    def test_same_seed_same_series(self):
        first = generate_synthetic_bars(10.0, '1H', end=self.END, rng=np.random.default_rng(7))
        second = generate_synthetic_bars(10.0, '1H', end=self.END, rng=np.random.default_rng(7))
        self.assertEqual(first, second)

    def test_invalid_anchor(self):
        with self.assertRaises(ValueError):
            generate_synthetic_bars(0, '1D')
        with self.assertRaises(ValueError):
            generate_synthetic_bars(10.0, '1D', periods=0)


if __name__ == '__main__':
    unittest.main()
