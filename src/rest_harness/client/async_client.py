"""
Asynchronous HTTP client built on httpx.

Same result contract as HttpClient, with awaitable verbs. An httpx transport
can be injected, e.g. ``httpx.ASGITransport(app=create_app())`` to exercise
the fake catalog in memory.
"""
import asyncio
import logging
from typing import Any, Mapping, Optional

import httpx

from rest_harness.config.models import ClientConfig
from .base_client import build_response, merge_headers, resolve_url, undecodable_response
from .response import NO_RESPONSE_ERROR, RequestResult, TransportFailure

logger = logging.getLogger(__name__)

NO_RESPONSE_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
    httpx.ProxyError,
)


def _describe(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


class AsyncHttpClient:
    """Asyncio harness client bound to one base URL, timeout and header set.

    The client holds no per-call state, so concurrent calls may share it.
    """

    def __init__(self, config: ClientConfig,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._client = httpx.AsyncClient(
            timeout=config.timeout_seconds,
            follow_redirects=True,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: ClientConfig,
                    transport: Optional[httpx.AsyncBaseTransport] = None) -> 'AsyncHttpClient':
        return cls(config, transport=transport)

    @classmethod
    def from_base_url(cls, base_url: str,
                      transport: Optional[httpx.AsyncBaseTransport] = None) -> 'AsyncHttpClient':
        return cls(ClientConfig.build(base_url=base_url), transport=transport)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def get(self, path, params=None, headers=None) -> RequestResult:
        return await self.request('GET', path, params=params, headers=headers)

    async def post(self, path, body=None, headers=None) -> RequestResult:
        return await self.request('POST', path, body={} if body is None else body, headers=headers)

    async def put(self, path, body=None, headers=None) -> RequestResult:
        return await self.request('PUT', path, body={} if body is None else body, headers=headers)

    async def patch(self, path, body=None, headers=None) -> RequestResult:
        return await self.request('PATCH', path, body={} if body is None else body, headers=headers)

    async def delete(self, path, headers=None) -> RequestResult:
        return await self.request('DELETE', path, headers=headers)

    async def request(self, method: str, path: str,
                      params: Optional[Mapping[str, Any]] = None,
                      body: Any = None,
                      headers: Optional[Mapping[str, str]] = None) -> RequestResult:
        url = resolve_url(self.config.base_url, path)
        try:
            request = self._client.build_request(
                method,
                url,
                params=params,
                json=body,
                headers=merge_headers(self.config.headers, headers),
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            logger.warning(f"{method} {url} could not be prepared: {_describe(e)}")
            return TransportFailure(error=_describe(e))

        retries = self.config.retries
        attempt = 0
        while True:
            response = None
            try:
                response = await self._client.send(request, stream=True)
                await response.aread()
            except httpx.DecodingError as e:
                if response is None:
                    # Raised while reading an intermediate redirect response.
                    logger.warning(f"{method} {request.url} could not follow redirect: {_describe(e)}")
                    return TransportFailure(error=_describe(e))
                await response.aclose()
                logger.warning(
                    f"{method} {request.url} -> {response.status_code} "
                    f"with an undecodable body: {_describe(e)}"
                )
                return undecodable_response(response.status_code, response.headers, _describe(e))
            except NO_RESPONSE_ERRORS as e:
                if response is not None:
                    await response.aclose()
                if attempt >= retries:
                    logger.warning(f"{method} {request.url} got no response ({e.__class__.__name__})")
                    return TransportFailure(error=NO_RESPONSE_ERROR)
                delay = self.config.retry_backoff / 1000.0 * (2 ** attempt)
                attempt += 1
                logger.warning(
                    f"{method} {request.url} got no response "
                    f"({e.__class__.__name__}); retry {attempt}/{retries} in {delay:.3f}s"
                )
                await asyncio.sleep(delay)
                continue
            except httpx.HTTPError as e:
                if response is not None:
                    await response.aclose()
                logger.warning(f"{method} {request.url} could not be sent: {_describe(e)}")
                return TransportFailure(error=_describe(e))

            logger.debug(f"{method} {request.url} -> {response.status_code}")
            return build_response(response.status_code, response.text, response.headers)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> 'AsyncHttpClient':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
