"""
In-process fake of the public catalog APIs the live suites target.

Resources follow the shapes of the fake-store style APIs: bare JSON arrays for
collections, 201 with an assigned id on create, and a 404 carrying a
``message`` field for unknown ids. Writes are echoed but never persisted, so
repeated reads always return the seed data.
"""
import asyncio
import copy
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

MAX_DELAY_MS = 10000

PRODUCTS = [
    {'id': 1, 'title': 'Wireless Headphones', 'price': 9.99,
     'description': 'Over-ear headphones with 30h battery', 'category': 'electronics'},
    {'id': 2, 'title': 'USB-C Charger', 'price': 19.5,
     'description': '65W GaN charger', 'category': 'electronics'},
    {'id': 3, 'title': 'Silver Ring', 'price': 120.0,
     'description': 'Sterling silver band', 'category': 'jewelery'},
    {'id': 4, 'title': 'Cotton T-Shirt', 'price': 15.0,
     'description': 'Crew neck, 100% cotton', 'category': "men's clothing"},
    {'id': 5, 'title': 'Rain Jacket', 'price': 59.95,
     'description': 'Lightweight waterproof shell', 'category': "women's clothing"},
]

USERS = [
    {'id': 1, 'email': 'john@example.com', 'username': 'johnd',
     'name': {'firstname': 'John', 'lastname': 'Doe'}},
    {'id': 2, 'email': 'morrison@example.com', 'username': 'mor_2314',
     'name': {'firstname': 'David', 'lastname': 'Morrison'}},
    {'id': 3, 'email': 'kevin@example.com', 'username': 'kevinryan',
     'name': {'firstname': 'Kevin', 'lastname': 'Ryan'}},
]

CARTS = [
    {'id': 1, 'userId': 1, 'date': '2024-03-02',
     'products': [{'productId': 1, 'quantity': 4}, {'productId': 2, 'quantity': 1}]},
    {'id': 2, 'userId': 1, 'date': '2024-01-02',
     'products': [{'productId': 3, 'quantity': 1}]},
    {'id': 3, 'userId': 2, 'date': '2024-03-01',
     'products': [{'productId': 5, 'quantity': 2}]},
]

POSTS = [
    {'id': 1, 'userId': 1, 'title': 'First post', 'body': 'Hello from the catalog team',
     'tags': ['news']},
    {'id': 2, 'userId': 2, 'title': 'Shipping update', 'body': 'Orders ship within 2 days',
     'tags': ['shipping', 'news']},
]


class _BadBody(Exception):
    """Request body is not a JSON object."""


async def apply_delay(delay: int = Query(0, ge=0, le=MAX_DELAY_MS)) -> None:
    """Hold the response for ``delay`` milliseconds."""
    if delay:
        await asyncio.sleep(delay / 1000.0)


async def _read_json(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    if not raw:
        return {}
    try:
        payload = await request.json()
    except ValueError:
        raise _BadBody() from None
    if not isinstance(payload, dict):
        raise _BadBody()
    return payload


def _not_found(label: str, record_id: int) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={'message': f"{label} with id '{record_id}' not found"},
    )


def _limited(records: List[Dict[str, Any]], limit: Optional[int]) -> List[Dict[str, Any]]:
    if limit is not None:
        records = records[:limit]
    return copy.deepcopy(records)


def resource_router(name: str, label: str, seed: List[Dict[str, Any]]) -> APIRouter:
    """Build list/get/create/replace/update/delete routes for one resource."""
    router = APIRouter(prefix=f'/{name}', tags=[name])
    records = {record['id']: record for record in seed}

    @router.get('')
    async def list_records(limit: Optional[int] = Query(None, ge=0)):
        return _limited(list(records.values()), limit)

    @router.get('/{record_id}')
    async def get_record(record_id: int):
        if record_id not in records:
            return _not_found(label, record_id)
        return copy.deepcopy(records[record_id])

    @router.post('', status_code=201)
    async def create_record(request: Request):
        payload = await _read_json(request)
        return {**payload, 'id': max(records) + 1}

    @router.put('/{record_id}')
    async def replace_record(record_id: int, request: Request):
        if record_id not in records:
            return _not_found(label, record_id)
        payload = await _read_json(request)
        return {**payload, 'id': record_id}

    @router.patch('/{record_id}')
    async def update_record(record_id: int, request: Request):
        if record_id not in records:
            return _not_found(label, record_id)
        payload = await _read_json(request)
        return {**copy.deepcopy(records[record_id]), **payload, 'id': record_id}

    @router.delete('/{record_id}')
    async def delete_record(record_id: int):
        if record_id not in records:
            return _not_found(label, record_id)
        return {
            **copy.deepcopy(records[record_id]),
            'isDeleted': True,
            'deletedOn': datetime.now(timezone.utc).isoformat(),
        }

    return router


def create_app() -> FastAPI:
    """Create a fresh fake catalog application."""
    app = FastAPI(title='rest-harness fake catalog', dependencies=[Depends(apply_delay)])

    @app.exception_handler(_BadBody)
    async def bad_body_handler(request: Request, exc: _BadBody):
        return JSONResponse(status_code=400, content={'message': 'Body must be a JSON object'})

    @app.get('/products/categories', tags=['products'])
    async def product_categories():
        return sorted({product['category'] for product in PRODUCTS})

    @app.get('/carts/user/{user_id}', tags=['carts'])
    async def user_carts(user_id: int):
        return copy.deepcopy([cart for cart in CARTS if cart['userId'] == user_id])

    app.include_router(resource_router('products', 'Product', PRODUCTS))
    app.include_router(resource_router('users', 'User', USERS))
    app.include_router(resource_router('carts', 'Cart', CARTS))
    app.include_router(resource_router('posts', 'Post', POSTS))

    @app.api_route('/anything', methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'])
    async def anything(request: Request):
        """Echo the request back for header and query assertions."""
        payload = await _read_json(request) if request.method != 'GET' else None
        return {
            'method': request.method,
            'headers': dict(request.headers),
            'args': dict(request.query_params),
            'json': payload,
        }

    logger.debug('Fake catalog application created')
    return app
