"""
Auth profile and response models.

An AuthProfile is chosen once per session and decides how every request of
that session is authorized.
"""
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Union

from ..exceptions import TransportError


@dataclass(frozen=True)
class UserAuth:
    """Three-legged OAuth 1.0a user credentials."""
    consumer_key: str
    consumer_secret: str
    token: str
    secret: str

    def __repr__(self) -> str:
        return f"UserAuth(consumer_key={self.consumer_key!r}, token={self.token!r})"


@dataclass(frozen=True)
class AppAuth:
    """Application-only bearer token."""
    bearer_token: str

    def __repr__(self) -> str:
        return "AppAuth(bearer_token=<redacted>)"


AuthProfile = Union[UserAuth, AppAuth]


def normalize_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """
    Bring response headers into one canonical shape.

    Keys are lower-cased and underscores become hyphens, so
    ``X_TON_Min_Chunk_Size`` and ``x-ton-min-chunk-size`` are the same key.
    Repeated headers keep the last value.
    """
    return {
        str(key).lower().replace('_', '-'): value
        for key, value in headers.items()
    }


@dataclass(frozen=True)
class TonResponse:
    """
    Response of one authenticated call.

    Attributes:
        status: HTTP status code
        headers: Normalized headers (see normalize_headers)
        body: Raw body (empty for streamed downloads)
    """
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b''

    @property
    def ok(self) -> bool:
        """True for any 2xx status."""
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Look a header up by any spelling of its name."""
        return self.headers.get(name.lower().replace('_', '-'), default)

    def raise_for_status(self, context: str) -> 'TonResponse':
        """
        Raise TransportError unless the status is 2xx.

        Args:
            context: What was being attempted, for the error message
        """
        if not self.ok:
            raise TransportError(
                f"{context} failed",
                status=self.status,
                body=self.body,
                headers=self.headers
            )
        return self
