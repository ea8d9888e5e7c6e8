"""
rest-harness: HTTP API test harness.

Build a client from an environment configuration, call the five verbs, and
assert on the uniform RequestResult they return.
"""

from .client import (
    AsyncHttpClient,
    HttpClient,
    NO_RESPONSE_ERROR,
    RequestResult,
    Response,
    TransportFailure,
)
from .config import ClientConfig, HarnessConfig, load_config
from .endpoints import expand_endpoint

__version__ = '0.1.0'

__all__ = [
    'HttpClient',
    'AsyncHttpClient',
    'RequestResult',
    'Response',
    'TransportFailure',
    'NO_RESPONSE_ERROR',
    'ClientConfig',
    'HarnessConfig',
    'load_config',
    'expand_endpoint',
]
