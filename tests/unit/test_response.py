"""
Unit tests for the RequestResult variants.
"""

import unittest

from rest_harness.client import NO_RESPONSE_ERROR, Response, TransportFailure


class TestResponse(unittest.TestCase):
    """A received response keeps its real status, body and headers."""

    def test_success_has_no_error(self):
        result = Response(status=200, data={'id': 1}, headers={'content-type': 'application/json'})

        self.assertTrue(result.ok)
        self.assertFalse(result.failed)
        self.assertIsNone(result.error)
        self.assertEqual(result.json(), {'id': 1})

    def test_error_status_is_not_a_failure(self):
        result = Response(status=404, data={'message': 'gone'}, headers={}, error='gone')

        self.assertFalse(result.ok)
        self.assertFalse(result.failed)
        self.assertEqual(result.status, 404)
        self.assertEqual(result.error, 'gone')

    def test_text_serializes_json(self):
        self.assertEqual(Response(status=200, data={'a': 1}, headers={}).text, '{"a": 1}')
        self.assertEqual(Response(status=200, data='plain', headers={}).text, 'plain')
        self.assertEqual(Response(status=204, data=None, headers={}).text, '')

    def test_results_are_immutable(self):
        result = Response(status=200, data=[], headers={})
        with self.assertRaises(AttributeError):
            result.status = 500


class TestTransportFailure(unittest.TestCase):
    """A transport failure always has status 0, no data and a message."""

    def test_defaults(self):
        failure = TransportFailure(error=NO_RESPONSE_ERROR)

        self.assertEqual(failure.status, 0)
        self.assertIsNone(failure.data)
        self.assertIsNone(failure.headers)
        self.assertTrue(failure.failed)
        self.assertFalse(failure.ok)
        self.assertEqual(failure.text, '')

    def test_rejects_status(self):
        with self.assertRaises(ValueError):
            TransportFailure(error='boom', status=500)

    def test_rejects_data(self):
        with self.assertRaises(ValueError):
            TransportFailure(error='boom', data={'id': 1})

    def test_requires_message(self):
        with self.assertRaises(ValueError):
            TransportFailure(error='')


if __name__ == '__main__':
    unittest.main()
