"""
HTTP client built on a requests Session.

Used by test suites for real network interface testing. Every verb returns a
RequestResult: HTTP error statuses come back as Response objects, and network
failures come back as TransportFailure objects instead of exceptions.
"""
import logging
import time
from typing import Any, Mapping, Optional

import requests

from rest_harness.config.models import ClientConfig
from .base_client import APIClient, build_response, merge_headers, resolve_url, undecodable_response
from .response import NO_RESPONSE_ERROR, RequestResult, TransportFailure

logger = logging.getLogger(__name__)

# The request left the client but no response came back.
NO_RESPONSE_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    requests.exceptions.ChunkedEncodingError,
)


def _describe(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


class HttpClient(APIClient):
    """Synchronous harness client bound to one base URL, timeout and header set.

    Usage:
        client = HttpClient.from_base_url("https://dummyjson.com")
        result = client.get("/products/1")
        assert result.status == 200
    """

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        """Bind the client to a configuration. No network activity happens here.

        Args:
            config: Validated client configuration
            session: Optional requests Session to send through
        """
        self.config = config
        self._session = session or requests.Session()

    @classmethod
    def from_config(cls, config: ClientConfig) -> 'HttpClient':
        return cls(config)

    @classmethod
    def from_base_url(cls, base_url: str) -> 'HttpClient':
        """Build a client with default timeout and headers.

        Raises:
            ClientConfigurationError: If base_url is not an absolute http(s) URL
        """
        return cls(ClientConfig.build(base_url=base_url))

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def get(self, path, params=None, headers=None) -> RequestResult:
        return self.request('GET', path, params=params, headers=headers)

    def post(self, path, body=None, headers=None) -> RequestResult:
        return self.request('POST', path, body={} if body is None else body, headers=headers)

    def put(self, path, body=None, headers=None) -> RequestResult:
        return self.request('PUT', path, body={} if body is None else body, headers=headers)

    def patch(self, path, body=None, headers=None) -> RequestResult:
        return self.request('PATCH', path, body={} if body is None else body, headers=headers)

    def delete(self, path, headers=None) -> RequestResult:
        return self.request('DELETE', path, headers=headers)

    def request(self, method: str, path: str,
                params: Optional[Mapping[str, Any]] = None,
                body: Any = None,
                headers: Optional[Mapping[str, str]] = None) -> RequestResult:
        """Send one request and normalize its outcome.

        ``body`` is serialized as JSON when not None.
        """
        url = resolve_url(self.config.base_url, path)
        try:
            prepared = self._session.prepare_request(requests.Request(
                method=method,
                url=url,
                params=params,
                json=body,
                headers=merge_headers(self.config.headers, headers),
            ))
        except (requests.RequestException, TypeError, ValueError) as e:
            logger.warning(f"{method} {url} could not be prepared: {_describe(e)}")
            return TransportFailure(error=_describe(e))
        return self._send(prepared)

    def _send(self, prepared: requests.PreparedRequest) -> RequestResult:
        settings = self._session.merge_environment_settings(prepared.url, {}, True, None, None)
        retries = self.config.retries

        attempt = 0
        while True:
            response = None
            try:
                response = self._session.send(
                    prepared, timeout=self.config.timeout_seconds, **settings
                )
                text = response.text
            except requests.exceptions.ContentDecodingError as e:
                response.close()
                logger.warning(
                    f"{prepared.method} {prepared.url} -> {response.status_code} "
                    f"with an undecodable body: {_describe(e)}"
                )
                return undecodable_response(response.status_code, response.headers, _describe(e))
            except NO_RESPONSE_ERRORS as e:
                if response is not None:
                    response.close()
                if attempt >= retries:
                    logger.warning(
                        f"{prepared.method} {prepared.url} got no response ({e.__class__.__name__})"
                    )
                    return TransportFailure(error=NO_RESPONSE_ERROR)
                delay = self._backoff_seconds(attempt)
                attempt += 1
                logger.warning(
                    f"{prepared.method} {prepared.url} got no response "
                    f"({e.__class__.__name__}); retry {attempt}/{retries} in {delay:.3f}s"
                )
                time.sleep(delay)
                continue
            except requests.RequestException as e:
                if response is not None:
                    response.close()
                logger.warning(f"{prepared.method} {prepared.url} could not be sent: {_describe(e)}")
                return TransportFailure(error=_describe(e))

            logger.debug(f"{prepared.method} {prepared.url} -> {response.status_code}")
            return build_response(response.status_code, text, response.headers)

    def _backoff_seconds(self, attempt: int) -> float:
        return self.config.retry_backoff / 1000.0 * (2 ** attempt)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> 'HttpClient':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
