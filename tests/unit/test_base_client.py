"""
Unit tests for URL resolution, header merging and response normalization.
"""

import unittest

from requests.structures import CaseInsensitiveDict

from rest_harness.client.base_client import (
    build_response,
    error_message,
    merge_headers,
    parse_body,
    resolve_url,
    undecodable_response,
)
from rest_harness.config import DEFAULT_HEADERS


class TestResolveUrl(unittest.TestCase):

    def test_relative_paths_concatenate(self):
        self.assertEqual(resolve_url('https://api.test', '/products'), 'https://api.test/products')
        self.assertEqual(resolve_url('https://api.test/', '/products'), 'https://api.test/products')
        self.assertEqual(resolve_url('https://api.test', 'products/1'), 'https://api.test/products/1')

    def test_base_path_prefix_is_kept(self):
        self.assertEqual(resolve_url('https://api.test/v2', '/users'), 'https://api.test/v2/users')

    def test_absolute_url_overrides_base(self):
        self.assertEqual(
            resolve_url('https://api.test', 'https://other.test/posts'),
            'https://other.test/posts',
        )

    def test_empty_path_is_base(self):
        self.assertEqual(resolve_url('https://api.test', ''), 'https://api.test')


class TestMergeHeaders(unittest.TestCase):

    def test_defaults_without_extra(self):
        self.assertEqual(merge_headers(DEFAULT_HEADERS), DEFAULT_HEADERS)
        self.assertEqual(merge_headers(DEFAULT_HEADERS, {}), DEFAULT_HEADERS)

    def test_extra_headers_are_added(self):
        merged = merge_headers(DEFAULT_HEADERS, {'X-Custom-Header': 'test-value'})

        self.assertEqual(merged['X-Custom-Header'], 'test-value')
        self.assertEqual(merged['Accept'], 'application/json')
        self.assertEqual(merged['Content-Type'], 'application/json')

    def test_override_is_case_insensitive(self):
        merged = merge_headers(DEFAULT_HEADERS, {'accept': 'text/plain'})

        self.assertEqual(CaseInsensitiveDict(merged)['Accept'], 'text/plain')
        self.assertEqual(len(merged), 2)

    def test_defaults_are_not_mutated(self):
        defaults = dict(DEFAULT_HEADERS)
        merge_headers(defaults, {'Accept': 'text/html'})
        self.assertEqual(defaults, DEFAULT_HEADERS)


class TestNormalization(unittest.TestCase):

    def test_parse_body(self):
        self.assertEqual(parse_body('{"id": 1}'), {'id': 1})
        self.assertEqual(parse_body('[1, 2]'), [1, 2])
        self.assertEqual(parse_body('<html></html>'), '<html></html>')
        self.assertIsNone(parse_body(''))

    def test_error_message_prefers_body_message(self):
        self.assertEqual(error_message(404, {'message': "Product with id '9' not found"}),
                         "Product with id '9' not found")

    def test_error_message_generic(self):
        self.assertEqual(error_message(500, 'oops'), 'Request failed with status code 500')
        self.assertEqual(error_message(404, {'message': ''}), 'Request failed with status code 404')
        self.assertEqual(error_message(404, {'message': None}), 'Request failed with status code 404')

    def test_error_message_surfaces_non_string_message(self):
        self.assertEqual(error_message(422, {'message': 42}), '42')
        self.assertEqual(error_message(400, {'message': ['title is required']}),
                         "['title is required']")

    def test_no_error_below_400(self):
        self.assertIsNone(error_message(200, {'message': 'created'}))
        self.assertIsNone(error_message(302, None))

    def test_build_response_lowercases_headers(self):
        result = build_response(404, '{"message": "nope"}', {'Content-Type': 'application/json'})

        self.assertEqual(result.status, 404)
        self.assertEqual(result.data, {'message': 'nope'})
        self.assertEqual(result.headers, {'content-type': 'application/json'})
        self.assertEqual(result.error, 'nope')

    def test_undecodable_response_keeps_status(self):
        result = undecodable_response(200, {'Content-Encoding': 'gzip'}, 'bad gzip')

        self.assertEqual(result.status, 200)
        self.assertIsNone(result.data)
        self.assertEqual(result.headers, {'content-encoding': 'gzip'})
        self.assertEqual(result.error, 'Response body could not be decoded: bad gzip')
        self.assertFalse(result.failed)


if __name__ == '__main__':
    unittest.main()
