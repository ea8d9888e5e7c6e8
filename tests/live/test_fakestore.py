"""
Live checks against the primary base URL of the selected environment
(Fake Store API in qa). Run with ``invoke test --suite=live``.
"""

import pytest

pytestmark = pytest.mark.live


# ==================== GET ====================

def test_get_all_products(api_client, harness_config):
    response = api_client.get(harness_config.endpoint('products'))

    assert response.status == 200
    assert isinstance(response.data, list)
    assert len(response.data) > 0
    for field in ('id', 'title', 'price', 'category'):
        assert field in response.data[0]


def test_get_single_product(api_client, harness_config):
    response = api_client.get(harness_config.endpoint('singleProduct', id=1))

    assert response.status == 200
    assert response.data['id'] == 1
    assert response.error is None


def test_get_products_with_limit(api_client, harness_config):
    response = api_client.get(harness_config.endpoint('products'), {'limit': 5})

    assert response.status == 200
    assert len(response.data) <= 5


def test_get_product_categories(api_client, harness_config):
    response = api_client.get(harness_config.endpoint('productCategories'))

    assert response.status == 200
    assert isinstance(response.data, list)
    assert 'electronics' in response.data


def test_get_single_user(api_client, harness_config):
    response = api_client.get(harness_config.endpoint('singleUser', id=1))

    assert response.status == 200
    assert response.data['id'] == 1
    assert 'email' in response.data


def test_get_user_carts(api_client, harness_config):
    response = api_client.get(harness_config.endpoint('userCarts', id=1))

    assert response.status == 200
    assert isinstance(response.data, list)
    assert all(cart['userId'] == 1 for cart in response.data)


# ==================== Writes ====================

def test_create_product(api_client, harness_config):
    new_product = {
        'title': 'Test Product',
        'price': 29.99,
        'description': 'Created by the live suite',
        'category': 'electronics',
    }

    response = api_client.post(harness_config.endpoint('products'), new_product)

    assert response.status in (200, 201)
    assert 'id' in response.data
    assert response.data['title'] == new_product['title']


def test_update_product(api_client, harness_config):
    updated = {'title': 'Updated Product', 'price': 39.99}

    response = api_client.put(harness_config.endpoint('singleProduct', id=1), updated)

    assert response.status == 200
    assert response.data['title'] == updated['title']


def test_patch_product(api_client, harness_config):
    response = api_client.patch(harness_config.endpoint('singleProduct', id=1), {'price': 49.99})

    assert response.status == 200
    assert response.data['price'] == 49.99


def test_delete_product(api_client, harness_config):
    response = api_client.delete(harness_config.endpoint('singleProduct', id=1))

    assert response.status == 200
    assert response.error is None


# ==================== Headers ====================

def test_custom_header_accepted(api_client, harness_config):
    response = api_client.get(
        harness_config.endpoint('products'),
        {'limit': 1},
        {'X-Custom-Header': 'test-value'},
    )

    assert response.status == 200
    assert 'content-type' in response.headers
