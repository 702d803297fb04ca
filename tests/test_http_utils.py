"""Tests for the retrying GET helper."""
import sys
import os
import unittest
from unittest.mock import MagicMock, patch

import requests

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.http_utils import make_request


def fake_response(status, payload=None, headers=None):
    response = MagicMock()
    response.status_code = status
    response.headers = headers or {}
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    return response


@patch('utils.http_utils.time.sleep')
@patch('utils.http_utils.requests.get')
class TestMakeRequest(unittest.TestCase):

    def test_success(self, mock_get, mock_sleep):
        mock_get.return_value = fake_response(200, {'results': []})
        self.assertEqual(make_request('https://example.test/a'), {'results': []})
        mock_sleep.assert_not_called()

    def test_rate_limit_honors_retry_after(self, mock_get, mock_sleep):
        mock_get.side_effect = [
            fake_response(429, headers={'Retry-After': '2'}),
            fake_response(200, {'ok': True}),
        ]
        self.assertEqual(make_request('https://example.test/a', retry_delay=0.1), {'ok': True})
        mock_sleep.assert_called_once_with(2.0)

    def test_server_errors_back_off_then_give_up(self, mock_get, mock_sleep):
        mock_get.return_value = fake_response(503)
        self.assertIsNone(make_request('https://example.test/a', retries=2, retry_delay=1.0))
        self.assertEqual(mock_get.call_count, 3)
        self.assertEqual([c[0][0] for c in mock_sleep.call_args_list], [1.0, 2.0])

    def test_not_found_is_not_retried(self, mock_get, mock_sleep):
        mock_get.return_value = fake_response(404)
        self.assertIsNone(make_request('https://example.test/a'))
        self.assertEqual(mock_get.call_count, 1)

    def test_connection_error_is_retried(self, mock_get, mock_sleep):
        mock_get.side_effect = [requests.exceptions.ConnectionError("reset"), fake_response(200, [1, 2])]
        self.assertEqual(make_request('https://example.test/a'), [1, 2])
        self.assertEqual(mock_sleep.call_count, 1)


if __name__ == '__main__':
    unittest.main()
