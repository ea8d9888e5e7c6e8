"""
Base API client and the normalization helpers shared by every transport.
"""
import json
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from requests.structures import CaseInsensitiveDict

from .response import RequestResult, Response

_ABSOLUTE_URL = re.compile(r'^[a-z][a-z\d+\-.]*://', re.IGNORECASE)


def resolve_url(base_url: str, path: str) -> str:
    """Resolve an endpoint path against a base URL.

    Absolute URLs are returned unchanged; relative paths are joined to the
    base URL with exactly one slash.
    """
    if path and _ABSOLUTE_URL.match(path):
        return path
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def merge_headers(defaults: Mapping[str, str],
                  extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Merge per-call headers over defaults, matching names case-insensitively."""
    merged = CaseInsensitiveDict(defaults)
    if extra:
        merged.update(extra)
    return dict(merged)


def parse_body(text: str) -> Any:
    """Decode a response body as JSON, falling back to raw text. Empty is None."""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


def error_message(status: int, data: Any) -> Optional[str]:
    """Describe an error response; None for status codes below 400."""
    if status < 400:
        return None
    if isinstance(data, dict):
        message = data.get('message')
        if message:
            return str(message)
    return f"Request failed with status code {status}"


def build_response(status: int, text: str, headers: Mapping[str, str]) -> Response:
    """Normalize a received HTTP response into a Response result.

    Header names are lower-cased so lookups do not depend on the transport.
    """
    data = parse_body(text)
    return Response(
        status=status,
        data=data,
        headers={name.lower(): value for name, value in headers.items()},
        error=error_message(status, data),
    )


def undecodable_response(status: int, headers: Mapping[str, str], reason: str) -> Response:
    """A response arrived but its body could not be decoded.

    The real status is kept; data is None and error names the decoding failure.
    """
    return Response(
        status=status,
        data=None,
        headers={name.lower(): value for name, value in headers.items()},
        error=f"Response body could not be decoded: {reason}",
    )


class APIClient(ABC):
    """Abstract base class for harness API clients.

    Every verb returns a RequestResult and never raises for request outcomes.
    """

    @abstractmethod
    def get(self, path: str, params: Optional[Mapping[str, Any]] = None,
            headers: Optional[Mapping[str, str]] = None) -> RequestResult:
        """Make GET request to API endpoint."""

    @abstractmethod
    def post(self, path: str, body: Any = None,
             headers: Optional[Mapping[str, str]] = None) -> RequestResult:
        """Make POST request to API endpoint."""

    @abstractmethod
    def put(self, path: str, body: Any = None,
            headers: Optional[Mapping[str, str]] = None) -> RequestResult:
        """Make PUT request to API endpoint."""

    @abstractmethod
    def patch(self, path: str, body: Any = None,
              headers: Optional[Mapping[str, str]] = None) -> RequestResult:
        """Make PATCH request to API endpoint."""

    @abstractmethod
    def delete(self, path: str, headers: Optional[Mapping[str, str]] = None) -> RequestResult:
        """Make DELETE request to API endpoint."""
