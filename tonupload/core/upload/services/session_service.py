"""
Resumable session initiation.

Asks the server to open a multi-part upload and reads back the session URL
and the chunk size the client has to use.
"""
from typing import Optional

from ..models import UploadSession
from ..protocols import SignerProtocol
from ...auth.models import TonResponse
from ...config import TonConfig
from ...exceptions import TransportError
from ...logging import get_logger


class SessionInitiator:
    """
    Opens resumable upload sessions.
    
    Example:
        >>> initiator = SessionInitiator(signer, config)
        >>> session = await initiator.initiate("my_bucket", "video/mp4", 20 * 1024 * 1024, expires)
        >>> session.negotiated_chunk_size
        8388608
    """
    
    def __init__(self, signer: SignerProtocol, config: TonConfig):
        self._signer = signer
        self._config = config
        self._logger = get_logger('tonupload.upload.session')
    
    async def initiate(
        self,
        bucket: str,
        content_type: str,
        file_size: int,
        expires: str
    ) -> UploadSession:
        """
        POST an empty body declaring the whole file.
        
        Args:
            bucket: Destination bucket
            content_type: Type of the complete file
            file_size: Length of the complete file
            expires: X-TON-Expires value
            
        Returns:
            UploadSession with absolute session URL and chunk size
            
        Raises:
            TransportError: If the server refuses or the answer is unusable
        """
        url = f"{self._config.bucket_url(bucket)}?resumable=true"
        headers = {
            'Content-Length': '0',
            'X-TON-Content-Type': content_type,
            'X-TON-Content-Length': str(file_size),
            'X-TON-Expires': expires,
        }
        self._logger.debug(f"Initiating resumable upload of {file_size} bytes to {bucket}")
        response = await self._signer.send('POST', url, headers, b'')
        response.raise_for_status("Resumable upload initiation")
        return self.parse_session(response)
    
    def parse_session(self, response: TonResponse) -> UploadSession:
        """
        Read session URL and chunk size out of an initiation response.
        
        Raises:
            TransportError: If either header is missing or malformed
        """
        location = response.header('location')
        if not location:
            raise TransportError(
                "Resumable upload initiation returned no Location",
                status=response.status, body=response.body, headers=response.headers
            )
        
        chunk_size = self._parse_chunk_size(response.header('x-ton-min-chunk-size'))
        if chunk_size is None:
            raise TransportError(
                "Resumable upload initiation returned no usable X-TON-Min-Chunk-Size",
                status=response.status, body=response.body, headers=response.headers
            )
        
        if chunk_size > self._config.max_request_size:
            raise TransportError(
                f"Negotiated chunk size {chunk_size} exceeds request limit "
                f"{self._config.max_request_size}",
                status=response.status, headers=response.headers
            )
        
        session = UploadSession(
            resumable_upload_url=self._config.resolve(location),
            negotiated_chunk_size=chunk_size
        )
        self._logger.info(
            f"Resumable session opened, chunk size {chunk_size} bytes"
        )
        return session
    
    @staticmethod
    def _parse_chunk_size(value: Optional[str]) -> Optional[int]:
        if value is None:
            return None
        try:
            size = int(value.strip())
        except ValueError:
            return None
        return size if size > 0 else None
