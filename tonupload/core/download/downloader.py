"""
Stored object download.
"""
from pathlib import Path
from typing import Optional, Union
import time

from ..auth.signer import AuthSigner, BearerSigner
from ..config import TonConfig
from ..exceptions import ConfigError, FileError
from ..logging import get_logger

logger = get_logger('tonupload.download')


def require_app_auth(signer: AuthSigner) -> None:
    """
    Downloads are served to application (bearer) auth only.
    
    Raises:
        ConfigError: For any other signer
    """
    if not isinstance(signer, BearerSigner):
        raise ConfigError("Downloading from TON requires app auth (--app-auth)")


class Downloader:
    """
    Fetches stored objects to local files.
    
    Example:
        >>> downloader = Downloader(signer, config)
        >>> path = await downloader.download("/1.1/ton/data/my_bucket/abc123")
    """
    
    def __init__(self, signer: AuthSigner, config: Optional[TonConfig] = None):
        require_app_auth(signer)
        self._signer = signer
        self._config = config or signer.config
    
    async def download(
        self,
        location: str,
        dest: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        Download a stored object.
        
        Args:
            location: Location returned by an upload
            dest: Local destination (the staging path if None); overwritten
            
        Returns:
            Path the object was written to
            
        Raises:
            FileError: If the destination cannot be written
            TransportError: On a non-2xx answer
        """
        dest_path = Path(dest) if dest else self._config.staging_path
        url = self._config.resolve(location)
        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileError(f"Cannot create {dest_path.parent}: {e}") from e
        
        logger.info(f"Downloading {url} to {dest_path}")
        start = time.time()
        try:
            response = await self._signer.stream('GET', url, dest_path)
        except OSError as e:
            raise FileError(f"Cannot write {dest_path}: {e}") from e
        response.raise_for_status("Download")
        
        size = dest_path.stat().st_size
        logger.info(f"Downloaded {size} bytes in {time.time() - start:.2f}s")
        return dest_path
