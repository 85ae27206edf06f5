"""
Authenticated transport.

An AuthSigner owns the HTTP session of a transfer and authorizes every call
the same way. create_signer() is the one place that looks at which kind of
AuthProfile is in use.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union
import asyncio
import ssl
import time

import aiofiles
import aiohttp

from .models import AuthProfile, AppAuth, UserAuth, TonResponse, normalize_headers
from .oauth1 import OAuth1Authorizer
from ..config import TonConfig
from ..exceptions import TransportError
from ..logging import get_logger, redact_headers

wire_logger = get_logger('tonupload.wire')


class AuthSigner(ABC):
    """
    Base class for authorized TON transports.

    Never retries: a failed call surfaces as TransportError and the caller
    decides what to do.

    Example:
        >>> async with create_signer(AppAuth("token"), config) as signer:
        ...     response = await signer.send("GET", url)
    """

    def __init__(
        self,
        config: Optional[TonConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize signer.

        Args:
            config: Client configuration (TLS, timeouts, user agent)
            session: Optional shared session; created lazily otherwise
        """
        self._config = config or TonConfig.default()
        self._session = session
        self._owns_session = session is None

    @property
    def config(self) -> TonConfig:
        return self._config

    @abstractmethod
    def authorize(self, method: str, url: str) -> str:
        """Return the Authorization header value for a request."""

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(ssl=self._config.ssl.create_ssl_context())
            self._session = aiohttp.ClientSession(
                connector=connector,
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close session if we own it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> 'AuthSigner':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _prepare(self, method: str, url: str, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        prepared = dict(headers or {})
        prepared['Authorization'] = self.authorize(method, url)
        wire_logger.debug(f"> {method} {url}")
        for key, value in redact_headers(prepared).items():
            wire_logger.debug(f"> {key}: {value}")
        return prepared

    @staticmethod
    def _log_response(response: TonResponse, elapsed: float) -> None:
        wire_logger.debug(f"< {response.status} ({elapsed:.2f}s)")
        for key, value in response.headers.items():
            wire_logger.debug(f"< {key}: {value}")

    async def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: bytes = b''
    ) -> TonResponse:
        """
        Send one authorized request and read the whole response.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Request headers (Authorization is added)
            body: Request body

        Returns:
            TonResponse with normalized headers

        Raises:
            TransportError: On connection, DNS, TLS or timeout failure
        """
        prepared = self._prepare(method, url, headers)
        session = await self._get_session()
        start = time.time()
        try:
            # TON uses 308 for "Resume Incomplete", not as a redirect
            async with session.request(
                method, url, data=body, headers=prepared, allow_redirects=False
            ) as resp:
                payload = await resp.read()
                result = TonResponse(
                    status=resp.status,
                    headers=normalize_headers(resp.headers),
                    body=payload
                )
        except (aiohttp.ClientError, asyncio.TimeoutError, ssl.SSLError) as e:
            raise TransportError(f"{method} {url} failed: {e!r}") from e
        self._log_response(result, time.time() - start)
        return result

    async def stream(
        self,
        method: str,
        url: str,
        dest: Union[str, Path],
        headers: Optional[Dict[str, str]] = None
    ) -> TonResponse:
        """
        Send a request and write a successful response body to dest.

        The file is only touched for 2xx responses; error bodies are kept
        in the returned TonResponse instead.
        """
        prepared = self._prepare(method, url, headers)
        session = await self._get_session()
        chunk_size = self._config.download_chunk_size
        start = time.time()
        try:
            async with session.request(
                method, url, headers=prepared, allow_redirects=False
            ) as resp:
                response_headers = normalize_headers(resp.headers)
                if not 200 <= resp.status < 300:
                    result = TonResponse(resp.status, response_headers, await resp.read())
                else:
                    written = 0
                    async with aiofiles.open(dest, 'wb') as f:
                        async for chunk in resp.content.iter_chunked(chunk_size):
                            await f.write(chunk)
                            written += len(chunk)
                    wire_logger.debug(f"< {written} bytes written to {dest}")
                    result = TonResponse(resp.status, response_headers)
        except (aiohttp.ClientError, asyncio.TimeoutError, ssl.SSLError) as e:
            raise TransportError(f"{method} {url} failed: {e!r}") from e
        self._log_response(result, time.time() - start)
        return result


class OAuth1Signer(AuthSigner):
    """Signs every request with the user's OAuth 1.0a credentials."""

    def __init__(
        self,
        profile: UserAuth,
        config: Optional[TonConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
        authorizer: Optional[OAuth1Authorizer] = None
    ):
        super().__init__(config, session)
        self._authorizer = authorizer or OAuth1Authorizer(
            profile.consumer_key,
            profile.consumer_secret,
            profile.token,
            profile.secret
        )

    def authorize(self, method: str, url: str) -> str:
        return self._authorizer.authorization_header(method, url)


class BearerSigner(AuthSigner):
    """Attaches a static application bearer token."""

    def __init__(
        self,
        profile: AppAuth,
        config: Optional[TonConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        super().__init__(config, session)
        self._token = profile.bearer_token

    def authorize(self, method: str, url: str) -> str:
        return f"Bearer {self._token}"


def create_signer(
    profile: AuthProfile,
    config: Optional[TonConfig] = None,
    session: Optional[aiohttp.ClientSession] = None
) -> AuthSigner:
    """
    Build the signer matching an auth profile.

    Raises:
        TypeError: If profile is neither UserAuth nor AppAuth
    """
    if isinstance(profile, UserAuth):
        return OAuth1Signer(profile, config, session)
    if isinstance(profile, AppAuth):
        return BearerSigner(profile, config, session)
    raise TypeError(f"Unsupported auth profile: {type(profile).__name__}")
