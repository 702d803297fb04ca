"""Tests for key rotation, settings helpers and secure logging."""
import sys
import os
import logging
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.api_key_manager import APIKeyManager
from config.constants import DATA_SIGNALS
from config.settings import Settings, project_root
from signal_engine.models import GenerationRequest
from utils.logger import (
    LoggingContext, SecureFormatter, get_logging_mode, set_logging_mode, setup_logger,
)


class TestAPIKeyManager(unittest.TestCase):

    def setUp(self):
        with patch.dict(os.environ, {'_KEY_SET_INDEX': '0'}):
            self.manager = APIKeyManager()

    def test_comma_separated_keys_rotate(self):
        self.manager.register('POLYGON', 'alpha, beta ,')
        self.assertEqual(self.manager.get_key_count('POLYGON'), 2)
        self.assertEqual(self.manager.get('POLYGON'), 'alpha')
        self.manager.rotate()
        self.assertEqual(self.manager.get('POLYGON'), 'beta')
        self.manager.rotate()
        self.assertEqual(self.manager.get('POLYGON'), 'alpha')

    def test_stale_rotation_is_ignored(self):
        self.manager.register('POLYGON', 'alpha,beta,gamma')
        seen = self.manager.current_index
        self.assertEqual(self.manager.rotate(seen), seen + 1)
        self.assertEqual(self.manager.rotate(seen), seen + 1)
        self.assertEqual(self.manager.get('POLYGON'), 'beta')

    def test_missing_key(self):
        self.manager.register('POLYGON', None)
        self.assertFalse(self.manager.has_key('POLYGON'))
        self.assertIsNone(self.manager.get('POLYGON'))
        self.assertIsNone(self.manager.get('UNKNOWN'))


class TestSettings(unittest.TestCase):

    def test_environment_overrides(self):
        env = {'MARKET_DATA_PROVIDER': 'Polygon', 'SIGNAL_STORE_DIR': '/tmp/signals', 'POLYGON_API_KEY': 'k1,k2'}
        with patch.dict(os.environ, env):
            settings = Settings()
        self.assertEqual(settings.MARKET_DATA_PROVIDER, 'polygon')
        self.assertEqual(str(settings.SIGNAL_STORE_DIR), '/tmp/signals')
        self.assertTrue(settings.has_polygon_key())

    def test_store_dir_defaults_under_project_data(self):
        with patch.dict(os.environ):
            os.environ.pop('SIGNAL_STORE_DIR', None)
            settings = Settings()
        self.assertEqual(settings.SIGNAL_STORE_DIR, project_root / DATA_SIGNALS)
        self.assertEqual(settings.SIGNAL_STORE_DIR.parts[-2:], ('data', 'signals'))

    def test_mask_api_key(self):
        self.assertEqual(Settings.mask_api_key('abcd1234efgh5678'), 'abcd...5678')
        self.assertEqual(Settings.mask_api_key('short'), '****')


class TestSecureLogging(unittest.TestCase):

    def tearDown(self):
        set_logging_mode(LoggingContext.STANDALONE)

    def test_long_tokens_are_masked(self):
        formatter = SecureFormatter('%(message)s')
        record = logging.LogRecord(
            'polygon_provider', logging.INFO, __file__, 1,
            'GET /v2/aggs?apiKey=ABCDEFGHIJKLMNOPQRSTUVWX1234', None, None,
        )
        message = formatter.format(record)
        self.assertNotIn('ABCDEFGHIJKLMNOPQRSTUVWX1234', message)
        self.assertIn('ABCD...1234', message)

    def test_batch_mode_quiets_sub_modules(self):
        set_logging_mode(LoggingContext.BATCH)
        self.assertEqual(get_logging_mode(), LoggingContext.BATCH)
        self.assertEqual(setup_logger('signal_store').level, logging.WARNING)
        self.assertEqual(setup_logger('scan_pipeline').level, logging.INFO)

    def test_silent_mode(self):
        set_logging_mode(LoggingContext.SILENT)
        self.assertEqual(setup_logger('yahoo_provider').level, logging.CRITICAL)


class TestGenerationRequest(unittest.TestCase):

    def test_defaults(self):
        request = GenerationRequest()
        self.assertEqual(request.timeframes, ['1H', '4H', '1D', '1W'])
        self.assertEqual(request.min_score, 60)
        self.assertEqual(request.max_signals, 20)

    def test_timeframes_are_normalized(self):
        self.assertEqual(GenerationRequest(timeframes=['1h', '1d']).timeframes, ['1H', '1D'])

    def test_invalid_requests(self):
        with self.assertRaises(ValueError):
            GenerationRequest(timeframes=['15M'])
        with self.assertRaises(ValueError):
            GenerationRequest(timeframes=[])
        with self.assertRaises(ValueError):
            GenerationRequest(min_score=120)


if __name__ == '__main__':
    unittest.main()
