"""
Pydantic models for harness and client configuration.
"""
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rest_harness.endpoints import expand_endpoint
from .exceptions import ClientConfigurationError, ConfigException

DEFAULT_TIMEOUT_MS = 10000
DEFAULT_RETRY_BACKOFF_MS = 500
DEFAULT_HEADERS = {
    'Content-Type': 'application/json',
    'Accept': 'application/json',
}


def _default_headers() -> Dict[str, str]:
    return dict(DEFAULT_HEADERS)


def validate_base_url(value: str) -> str:
    """Ensure a base URL is absolute and uses http or https."""
    parsed = urlparse(value)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ValueError(f"base URL must be an absolute http(s) URL, got '{value}'")
    return value


class ClientConfig(BaseModel):
    """Immutable settings an HTTP client is bound to at construction.

    ``timeout`` and ``retry_backoff`` are in milliseconds. ``retries`` counts
    extra attempts made only when no response was received.

    A call that never gets a response waits roughly
    ``(retries + 1) * timeout + retry_backoff * (2 ** retries - 1)`` ms
    in the worst case, e.g. 4 * 10s + 3.5s with the qa settings.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    base_url: str = Field(alias='baseURL')
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    headers: Dict[str, str] = Field(default_factory=_default_headers)
    retries: int = Field(default=0, ge=0)
    retry_backoff: int = Field(default=DEFAULT_RETRY_BACKOFF_MS, ge=0)

    @field_validator('base_url')
    @classmethod
    def check_base_url(cls, value: str) -> str:
        return validate_base_url(value)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000.0

    @classmethod
    def build(cls, **fields: Any) -> 'ClientConfig':
        """Create a ClientConfig, raising ClientConfigurationError on bad input."""
        try:
            return cls(**fields)
        except ValidationError as e:
            raise ClientConfigurationError(str(e)) from e


class HarnessConfig(BaseModel):
    """One environment's settings as loaded from config/environments/<env>.yaml."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='forbid')

    env: str
    base_url: str = Field(alias='baseURL')
    base_url2: Optional[str] = Field(default=None, alias='baseURL2')
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    retries: int = Field(default=0, ge=0)
    headers: Dict[str, str] = Field(default_factory=_default_headers)
    endpoints: Dict[str, str] = Field(default_factory=dict)
    dummy_endpoints: Dict[str, str] = Field(default_factory=dict, alias='dummyEndpoints')

    @field_validator('base_url')
    @classmethod
    def check_base_url(cls, value: str) -> str:
        return validate_base_url(value)

    @field_validator('base_url2')
    @classmethod
    def check_base_url2(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return validate_base_url(value)

    def client_config(self, secondary: bool = False) -> ClientConfig:
        """Build the ClientConfig for the primary or secondary base URL."""
        base_url = self.base_url2 if secondary else self.base_url
        if base_url is None:
            raise ConfigException(
                f"Environment '{self.env}' has no baseURL2 configured",
                env_name=self.env,
                field_name='baseURL2',
            )
        return ClientConfig.build(
            base_url=base_url,
            timeout=self.timeout,
            headers=self.headers,
            retries=self.retries,
        )

    def endpoint(self, name: str, **params: Any) -> str:
        """Look up a named endpoint template and expand it."""
        return self._expand(self.endpoints, 'endpoints', name, params)

    def dummy_endpoint(self, name: str, **params: Any) -> str:
        """Look up a named endpoint template for the secondary API and expand it."""
        return self._expand(self.dummy_endpoints, 'dummyEndpoints', name, params)

    def _expand(self, table: Dict[str, str], field_name: str, name: str,
                params: Dict[str, Any]) -> str:
        if name not in table:
            raise ConfigException(
                f"Endpoint '{name}' is not defined in {field_name} for environment "
                f"'{self.env}'. Available: {', '.join(sorted(table))}",
                env_name=self.env,
                field_name=field_name,
            )
        return expand_endpoint(table[name], **params)
