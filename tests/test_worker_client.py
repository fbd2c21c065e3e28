"""
Unit tests for the release client and check script.

Tests include:
- Successful payload decoding
- HTTP and transport errors
- check_release pass/fail reporting
"""

import os
import sys
import unittest
from unittest.mock import Mock, patch

import requests

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'scripts'))

from worker.client import ReleaseClient, ReleaseResponse
from check_release import check_release


PAYLOAD = {
    'release': 'v2',
    'worker_file': '/srv/current/worker.py',
    'realpath': '/srv/releases/v2/worker.py',
}


def mock_response(status_code=200, data=None, content_type='application/json', text=''):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.headers = {'Content-Type': content_type}
    response.text = text
    if data is None:
        response.json.side_effect = ValueError('No JSON')
    else:
        response.json.return_value = data
    return response


class TestReleaseClient(unittest.TestCase):
    """Test ReleaseClient.fetch."""

    def setUp(self):
        self.client = ReleaseClient('http://worker:8080/', timeout=3)

    @patch('worker.client.requests.get')
    def test_fetch_success(self, mock_get):
        mock_get.return_value = mock_response(data=PAYLOAD)

        result = self.client.fetch()

        mock_get.assert_called_once_with('http://worker:8080/', timeout=3)
        self.assertTrue(result.success)
        self.assertEqual(result.release, 'v2')
        self.assertEqual(result.content_type, 'application/json')

    @patch('worker.client.requests.get')
    def test_fetch_path(self, mock_get):
        mock_get.return_value = mock_response(data=PAYLOAD)
        self.client.fetch('/status')
        mock_get.assert_called_once_with('http://worker:8080/status', timeout=3)

    @patch('worker.client.requests.get')
    def test_fetch_http_error(self, mock_get):
        mock_get.return_value = mock_response(503, data={'error': 'Request host is stopping'})

        result = self.client.fetch()

        self.assertFalse(result.success)
        self.assertEqual(result.status_code, 503)
        self.assertEqual(result.error, 'Request host is stopping')

    @patch('worker.client.requests.get')
    def test_fetch_http_error_with_list_body(self, mock_get):
        mock_get.return_value = mock_response(500, data=['oops'], text='["oops"]')

        result = self.client.fetch()

        self.assertFalse(result.success)
        self.assertEqual(result.status_code, 500)
        self.assertIsNone(result.data)
        self.assertIsNone(result.release)
        self.assertEqual(result.error, '["oops"]')

    @patch('worker.client.requests.get')
    def test_fetch_non_json(self, mock_get):
        mock_get.return_value = mock_response(data=None, content_type='text/html', text='<html>')

        result = self.client.fetch()

        self.assertFalse(result.success)
        self.assertIsNone(result.release)

    @patch('worker.client.requests.get')
    def test_fetch_connection_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError('refused')

        result = self.client.fetch()

        self.assertFalse(result.success)
        self.assertEqual(result.status_code, 0)
        self.assertIn('Connection error', result.error)

    @patch('worker.client.requests.get')
    def test_fetch_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()

        result = self.client.fetch()

        self.assertEqual(result.error, 'Request timed out')


class TestCheckRelease(unittest.TestCase):
    """Test the check_release script."""

    @patch('check_release.ReleaseClient')
    def test_matching_release_passes(self, mock_client):
        mock_client.return_value.fetch.return_value = ReleaseResponse(
            success=True, status_code=200, data=PAYLOAD, content_type='application/json')

        with patch('builtins.print'):
            self.assertTrue(check_release('http://worker:8080', 'v2'))

    @patch('check_release.ReleaseClient')
    def test_wrong_release_fails(self, mock_client):
        mock_client.return_value.fetch.return_value = ReleaseResponse(
            success=True, status_code=200, data=PAYLOAD, content_type='application/json')

        with patch('builtins.print'):
            self.assertFalse(check_release('http://worker:8080', 'v1'))

    @patch('check_release.ReleaseClient')
    def test_null_realpath_fails(self, mock_client):
        data = dict(PAYLOAD, realpath=None)
        mock_client.return_value.fetch.return_value = ReleaseResponse(
            success=True, status_code=200, data=data, content_type='application/json')

        with patch('builtins.print'):
            self.assertFalse(check_release('http://worker:8080', 'v2'))

    @patch('worker.client.requests.get')
    def test_error_with_list_body_fails(self, mock_get):
        mock_get.return_value = mock_response(500, data=['oops'], text='["oops"]')

        with patch('builtins.print'):
            self.assertFalse(check_release('http://worker:8080', 'v2'))

    @patch('check_release.ReleaseClient')
    def test_unreachable_fails(self, mock_client):
        mock_client.return_value.fetch.return_value = ReleaseResponse(
            success=False, status_code=0, error='Connection error: refused')

        with patch('builtins.print'):
            self.assertFalse(check_release('http://worker:8080', 'v2'))


if __name__ == '__main__':
    unittest.main()
