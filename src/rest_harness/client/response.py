"""
Result types returned by every client verb.

A verb call never raises for a request outcome. It returns either a
``Response`` (the server answered, with any status code) or a
``TransportFailure`` (no answer was received, or the request could not be sent).
"""
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

NO_RESPONSE_ERROR = 'No response received from server'


class _ResultMixin:
    """Accessors shared by both result variants."""

    status: int
    data: Any

    @property
    def ok(self) -> bool:
        """True for a 2xx response."""
        return 200 <= self.status < 300

    @property
    def failed(self) -> bool:
        """True when no response was received."""
        return self.status == 0

    def json(self) -> Any:
        """Return the parsed body (kept for parity with HTTP library responses)."""
        return self.data

    @property
    def text(self) -> str:
        """Return the body as text, serializing JSON values."""
        if self.data is None:
            return ''
        if isinstance(self.data, str):
            return self.data
        return json.dumps(self.data)


@dataclass(frozen=True)
class Response(_ResultMixin):
    """The server responded.

    4xx and 5xx are valid outcomes here, not failures. ``error`` carries the
    body's ``message`` field (or a generic description) for status >= 400.
    It is also set, with ``data`` None, when the body could not be decoded.
    """
    status: int
    data: Any
    headers: Dict[str, str]
    error: Optional[str] = None


@dataclass(frozen=True)
class TransportFailure(_ResultMixin):
    """No response was received; status is always 0 and data always None."""
    error: str
    status: int = 0
    data: Any = None
    headers: Optional[Dict[str, str]] = None

    def __post_init__(self):
        if self.status != 0 or self.data is not None:
            raise ValueError('TransportFailure must have status 0 and no data')
        if not self.error:
            raise ValueError('TransportFailure requires an error message')


RequestResult = Union[Response, TransportFailure]
