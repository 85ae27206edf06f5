"""
Upload verification.

Downloads a stored object again and compares content digests with the
local original.
"""
from pathlib import Path
from typing import Optional, Union
import hashlib

from .downloader import Downloader
from ..auth.signer import AuthSigner
from ..config import TonConfig
from ..exceptions import FileError, VerificationMismatch
from ..logging import get_logger

logger = get_logger('tonupload.download.verify')

DIGEST_BLOCK_SIZE = 1024 * 1024


def file_digest(path: Union[str, Path]) -> str:
    """
    MD5 hex digest of a file, read in 1 MiB blocks.
    
    Raises:
        FileError: If the file cannot be read
    """
    digest = hashlib.md5()
    try:
        with open(path, 'rb') as f:
            for block in iter(lambda: f.read(DIGEST_BLOCK_SIZE), b''):
                digest.update(block)
    except OSError as e:
        raise FileError(f"Cannot read {path}: {e}") from e
    return digest.hexdigest()


class TransferVerifier:
    """
    Compares a stored object with the file it was uploaded from.
    
    The download lands in the configured staging path, which is
    overwritten and left in place.
    """
    
    def __init__(self, signer: AuthSigner, config: Optional[TonConfig] = None):
        self._config = config or signer.config
        self._downloader = Downloader(signer, self._config)
    
    async def verify(self, location: str, original: Union[str, Path]) -> bool:
        """
        Download location and compare it with original.
        
        Returns:
            True if both digests match
        """
        try:
            await self.check(location, original)
        except VerificationMismatch as e:
            logger.warning(str(e))
            return False
        return True
    
    async def check(self, location: str, original: Union[str, Path]) -> str:
        """
        Like verify(), but raise on mismatch.
        
        Returns:
            The matching digest
            
        Raises:
            VerificationMismatch: If the digests differ
        """
        expected = file_digest(original)
        staged = await self._downloader.download(location, self._config.staging_path)
        actual = file_digest(staged)
        logger.info(f"Local digest {expected}, downloaded digest {actual}")
        if expected != actual:
            raise VerificationMismatch(expected, actual)
        return actual
