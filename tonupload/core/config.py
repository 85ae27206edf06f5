"""
Client configuration module.

Every tunable of the TON client lives here and is passed into components
at construction, so tests can override any of it.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from pathlib import Path
from typing import Optional, Dict, Any
from urllib.parse import urljoin
import os
import re
import ssl
import tempfile

from .exceptions import ConfigError

MiB = 1024 * 1024

BUCKET_PATTERN = re.compile(r'^[a-z_0-9]+$')


def validate_bucket(name: str) -> str:
    """
    Check a bucket name against the server's naming rule.

    Raises:
        ConfigError: If the name contains anything but [a-z_0-9]
    """
    if not name or not BUCKET_PATTERN.match(name):
        raise ConfigError(
            f"Invalid bucket name {name!r}: must match {BUCKET_PATTERN.pattern}"
        )
    return name


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.

    Allows customization of SSL behavior for security requirements.
    """
    verify: bool = True
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self):
        """Create SSL context from configuration (False disables verification)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        if self.cert_file:
            context.load_cert_chain(
                self.cert_file,
                keyfile=self.key_file
            )

        context.check_hostname = self.check_hostname

        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Chunk PUTs carry up to several MiB, so the total budget is generous.
    """
    total: float = 600.0
    connect: float = 30.0
    sock_read: float = 120.0
    sock_connect: float = 30.0

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class TonConfig:
    """
    Complete client configuration.

    Attributes:
        domain: API host (optionally with port)
        scheme: URL scheme, https outside of tests
        single_chunk_threshold: Files smaller than this go up in one request
        max_request_size: Largest body the server accepts in one request
        expires_after: Lifetime hint sent as X-TON-Expires
        token_url: OAuth2 client-credentials endpoint for app auth
        staging_path: Fixed file that downloads overwrite
        user_agent: User-Agent header value
        download_chunk_size: Buffer size when streaming GET bodies to disk
        verify_ranges: Check Range headers echoed on 308 responses
    """
    domain: str = 'ton.twitter.com'
    scheme: str = 'https'
    single_chunk_threshold: int = 8 * MiB
    max_request_size: int = 64 * MiB
    expires_after: timedelta = timedelta(days=10)
    token_url: str = 'https://api.twitter.com/oauth2/token'
    staging_path: Path = field(
        default_factory=lambda: Path(tempfile.gettempdir()) / 'ton_download.bin'
    )
    user_agent: str = 'tonupload/1.0.0'
    download_chunk_size: int = 128 * 1024
    verify_ranges: bool = True
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)

    API_PATH = '/1.1/ton/bucket/'

    def __post_init__(self):
        """Validate and normalize config."""
        if isinstance(self.staging_path, str):
            self.staging_path = Path(self.staging_path)

        if self.single_chunk_threshold <= 0:
            raise ConfigError("single_chunk_threshold must be positive")

        if self.single_chunk_threshold > self.max_request_size:
            raise ConfigError(
                f"single_chunk_threshold {self.single_chunk_threshold} exceeds "
                f"max_request_size {self.max_request_size}"
            )

    @classmethod
    def default(cls) -> 'TonConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def from_env(cls, **kwargs) -> 'TonConfig':
        """Create configuration honoring TON_DOMAIN and TON_STAGING_PATH."""
        if os.environ.get('TON_DOMAIN') and 'domain' not in kwargs:
            kwargs['domain'] = os.environ['TON_DOMAIN']
        if os.environ.get('TON_STAGING_PATH') and 'staging_path' not in kwargs:
            kwargs['staging_path'] = Path(os.environ['TON_STAGING_PATH'])
        return cls(**kwargs)

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.domain}"

    def bucket_url(self, bucket: str) -> str:
        """URL objects in a bucket are created under."""
        return f"{self.base_url}{self.API_PATH}{bucket}"

    def resolve(self, location: str) -> str:
        """
        Turn a Location header value into an absolute URL.

        The server answers with paths relative to the API host; absolute
        URLs are returned unchanged.
        """
        return urljoin(self.base_url + '/', location)

    def expires_header(self, now: Optional[datetime] = None) -> str:
        """HTTP-date for X-TON-Expires."""
        now = now or datetime.now(timezone.utc)
        return format_datetime(now + self.expires_after, usegmt=True)

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        return {
            'headers': {'User-Agent': self.user_agent},
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
