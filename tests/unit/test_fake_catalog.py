"""
Unit tests for the fake catalog application using FastAPI TestClient.
"""

import unittest

from fastapi.testclient import TestClient

from rest_harness.fake import create_app
from rest_harness.fake.catalog import PRODUCTS


class TestFakeCatalog(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(create_app())

    def test_list_products(self):
        response = self.client.get('/products')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), len(PRODUCTS))
        for product in response.json():
            self.assertEqual(set(product), {'id', 'title', 'price', 'description', 'category'})

    def test_limit(self):
        response = self.client.get('/products', params={'limit': 2})
        self.assertEqual([p['id'] for p in response.json()], [1, 2])

    def test_categories_route_is_not_an_id(self):
        response = self.client.get('/products/categories')

        self.assertEqual(response.status_code, 200)
        self.assertIn('electronics', response.json())

    def test_unknown_id(self):
        response = self.client.get('/users/42')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'message': "User with id '42' not found"})

    def test_create_assigns_next_id(self):
        response = self.client.post('/posts', json={'title': 'Hi', 'userId': 1})

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json(), {'title': 'Hi', 'userId': 1, 'id': 3})

    def test_writes_are_not_persisted(self):
        self.client.patch('/products/1', json={'title': 'Changed'})
        self.client.delete('/products/1')

        self.assertEqual(self.client.get('/products/1').json(), PRODUCTS[0])

    def test_update_unknown_id(self):
        self.assertEqual(self.client.put('/carts/99', json={}).status_code, 404)
        self.assertEqual(self.client.patch('/carts/99', json={}).status_code, 404)
        self.assertEqual(self.client.delete('/carts/99').status_code, 404)

    def test_user_carts(self):
        response = self.client.get('/carts/user/1')
        self.assertEqual([cart['id'] for cart in response.json()], [1, 2])

    def test_non_object_body_rejected(self):
        response = self.client.post('/products', content=b'[1, 2]',
                                    headers={'Content-Type': 'application/json'})

        self.assertEqual(response.status_code, 400)
        self.assertIn('message', response.json())

    def test_anything_echoes_request(self):
        response = self.client.post('/anything', params={'q': 'x'}, json={'a': 1},
                                    headers={'X-Trace': 'abc'})

        echoed = response.json()
        self.assertEqual(echoed['method'], 'POST')
        self.assertEqual(echoed['args'], {'q': 'x'})
        self.assertEqual(echoed['json'], {'a': 1})
        self.assertEqual(echoed['headers']['x-trace'], 'abc')

    def test_delay_is_bounded(self):
        self.assertEqual(self.client.get('/products', params={'delay': -1}).status_code, 422)


if __name__ == '__main__':
    unittest.main()
