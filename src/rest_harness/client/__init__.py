"""
API clients for harness test suites.

Every verb returns a RequestResult, so tests assert on ``result.status``
whether the server answered with an error status or never answered at all.
"""

from rest_harness.config.models import ClientConfig
from .async_client import AsyncHttpClient
from .base_client import APIClient
from .http_client import HttpClient
from .response import NO_RESPONSE_ERROR, RequestResult, Response, TransportFailure

__all__ = [
    'APIClient',
    'ClientConfig',
    'HttpClient',
    'AsyncHttpClient',
    'RequestResult',
    'Response',
    'TransportFailure',
    'NO_RESPONSE_ERROR',
]
