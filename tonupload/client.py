"""
High-level async client for TON.

Usage:
    >>> async with TonClient(AppAuth("token")) as ton:
    ...     location = await ton.upload("movie.mp4", "my_bucket")
    ...     assert await ton.verify(location, "movie.mp4")
"""
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

import aiohttp

from .core.auth import AuthProfile, AppAuth, UserAuth, AuthSigner, create_signer, fetch_bearer_token
from .core.config import TonConfig
from .core.credentials import CredentialStore, Credentials, JSONCredentialStore
from .core.download import Downloader, TransferVerifier
from .core.exceptions import ConfigError
from .core.logging import get_logger
from .core.upload import UploadCoordinator, UploadProgress, UploadResult

ProgressCallback = Callable[[UploadProgress], None]


def build_profile(
    credentials: Credentials,
    app_auth: bool,
    token: Optional[str] = None
) -> AuthProfile:
    """
    Build an auth profile without touching the network.

    Args:
        credentials: Stored credentials
        app_auth: Build an AppAuth instead of a UserAuth
        token: Bearer token, required for app auth

    Raises:
        ConfigError: If the credentials lack what the mode needs
    """
    credentials.require(app_auth)
    if app_auth:
        if not token:
            raise ConfigError("App auth needs a bearer token")
        return AppAuth(bearer_token=token)
    return UserAuth(
        consumer_key=credentials.consumer_key,
        consumer_secret=credentials.consumer_secret,
        token=credentials.token,
        secret=credentials.secret
    )


async def resolve_profile(
    credentials: Credentials,
    app_auth: bool,
    config: Optional[TonConfig] = None
) -> AuthProfile:
    """
    Turn stored credentials into an auth profile.

    App auth costs one token request; user auth uses the stored token as is.

    Raises:
        ConfigError: If the credentials lack what the mode needs
        TransportError: If the token exchange fails
    """
    credentials.require(app_auth)
    token = None
    if app_auth:
        token = await fetch_bearer_token(
            credentials.consumer_key, credentials.consumer_secret, config
        )
    return build_profile(credentials, app_auth, token)


def load_credentials(store: Optional[CredentialStore] = None, app_auth: bool = False) -> Credentials:
    """
    Load and check credentials before any network activity.

    Raises:
        ConfigError: If nothing is stored or fields are missing
    """
    store = store or JSONCredentialStore()
    credentials = store.load()
    if credentials is None:
        where = getattr(store, 'path', 'the credential store')
        raise ConfigError(f"No credentials found in {where}")
    return credentials.require(app_auth)


class TonClient:
    """
    Async client bundling one auth profile with the upload, download and
    verification services.

    One signer (and one HTTP session) serves every request of the client.
    """

    def __init__(
        self,
        profile: AuthProfile,
        config: Optional[TonConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize TON client.

        Args:
            profile: UserAuth or AppAuth
            config: Optional client configuration
            session: Optional aiohttp session to share
        """
        self._config = config or TonConfig.default()
        self._profile = profile
        self._signer: AuthSigner = create_signer(profile, self._config, session)
        self._logger = get_logger('tonupload.client')

    @classmethod
    async def from_store(
        cls,
        store: Optional[CredentialStore] = None,
        app_auth: bool = False,
        config: Optional[TonConfig] = None
    ) -> 'TonClient':
        """Build a client from stored credentials (fetching a bearer token for app auth)."""
        credentials = load_credentials(store, app_auth)
        profile = await resolve_profile(credentials, app_auth, config)
        return cls(profile, config)

    @property
    def config(self) -> TonConfig:
        return self._config

    @property
    def profile(self) -> AuthProfile:
        return self._profile

    @property
    def signer(self) -> AuthSigner:
        return self._signer

    async def __aenter__(self) -> 'TonClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the underlying HTTP session."""
        await self._signer.close()

    async def upload_file(
        self,
        file_path: Union[str, Path],
        bucket: str,
        progress_callback: Optional[ProgressCallback] = None
    ) -> UploadResult:
        """Upload a file, returning the full UploadResult."""
        coordinator = UploadCoordinator(self._signer, self._config, progress_callback)
        return await coordinator.upload_file(file_path, bucket)

    async def upload(
        self,
        file_path: Union[str, Path],
        bucket: str,
        progress_callback: Optional[ProgressCallback] = None
    ) -> str:
        """
        Upload a file to a bucket.

        Returns:
            Stored location of the object
        """
        result = await self.upload_file(file_path, bucket, progress_callback)
        return result.location

    async def download(self, location: str, dest: Optional[Union[str, Path]] = None) -> Path:
        """Download a stored object (to the staging path unless dest is given)."""
        return await Downloader(self._signer, self._config).download(location, dest)

    async def verify(self, location: str, original: Union[str, Path]) -> bool:
        """Download location and compare its digest with original."""
        return await TransferVerifier(self._signer, self._config).verify(location, original)

    async def verify_upload(
        self,
        file_path: Union[str, Path],
        bucket: str,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[str, bool]:
        """
        Upload a file, then download it again and compare digests.

        Returns:
            (location, digests_match)
        """
        location = await self.upload(file_path, bucket, progress_callback)
        matched = await self.verify(location, file_path)
        self._logger.info(
            f"Round trip of {Path(file_path).name}: {'digests match' if matched else 'digest mismatch'}"
        )
        return location, matched


async def upload(
    file_path: Union[str, Path],
    auth_profile: AuthProfile,
    api_domain: str,
    bucket_name: str,
    config: Optional[TonConfig] = None
) -> str:
    """
    Upload one file with a throwaway client.

    Returns:
        Stored location of the object
    """
    config = replace(config or TonConfig.default(), domain=api_domain)
    async with TonClient(auth_profile, config) as client:
        return await client.upload(file_path, bucket_name)


async def verify(
    stored_location: str,
    original_file_path: Union[str, Path],
    auth_profile: AuthProfile,
    config: Optional[TonConfig] = None
) -> bool:
    """Download a stored object and compare it with the original file."""
    async with TonClient(auth_profile, config) as client:
        return await client.verify(stored_location, original_file_path)
