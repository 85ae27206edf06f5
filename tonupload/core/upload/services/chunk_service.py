"""
Chunk upload service.

Sends the windows of a resumable session one at a time and interprets the
server's continuation signal.
"""
from typing import Optional

from ..models import ChunkDescriptor, UploadSession
from ..protocols import SignerProtocol
from ...auth.models import TonResponse
from ...exceptions import TransportError
from ...logging import get_logger

RESUME_INCOMPLETE = 308


class ChunkUploader:
    """
    Uploads chunks to a resumable session URL.
    
    Responsibilities:
    - PUT each chunk with its Content-Range
    - Treat 308 as "accepted, send the next one"
    - Pick up the stored location from the final response
    """
    
    def __init__(
        self,
        signer: SignerProtocol,
        session: UploadSession,
        file_size: int,
        content_type: str,
        verify_ranges: bool = True
    ):
        """
        Initialize chunk uploader.
        
        Args:
            signer: Authorized transport
            session: Negotiated upload session
            file_size: Total bytes of the file
            content_type: MIME type of the file
            verify_ranges: Check Range headers echoed on 308 responses
        """
        self._signer = signer
        self._session = session
        self._file_size = file_size
        self._content_type = content_type
        self._verify_ranges = verify_ranges
        self._location: Optional[str] = None
        self._logger = get_logger('tonupload.upload.chunk')
    
    @property
    def upload_url(self) -> str:
        """Returns the session URL."""
        return self._session.resumable_upload_url
    
    def get_location(self) -> Optional[str]:
        """Stored location, once the final chunk has been accepted."""
        return self._location
    
    async def upload_chunk(self, chunk: ChunkDescriptor, data: bytes) -> Optional[str]:
        """
        Upload a single chunk.
        
        Args:
            chunk: Window being sent
            data: Its bytes
            
        Returns:
            The stored location for the final chunk, None before that
            
        Raises:
            ValueError: If data does not match the descriptor
            TransportError: On any response other than the expected one
        """
        if len(data) != chunk.length:
            raise ValueError(
                f"Chunk {chunk.index} has {len(data)} bytes, descriptor says {chunk.length}"
            )
        
        headers = {
            'Content-Type': self._content_type,
            'Content-Length': str(chunk.length),
            'Content-Range': chunk.content_range(self._file_size),
        }
        self._logger.debug(f"Uploading chunk {chunk.index}: {headers['Content-Range']}")
        response = await self._signer.send('PUT', self.upload_url, headers, data)
        return self._process_response(response, chunk)
    
    def _process_response(self, response: TonResponse, chunk: ChunkDescriptor) -> Optional[str]:
        """
        Interpret the answer to one chunk.
        
        Returns:
            Location for the final chunk, None for an accepted intermediate one
        """
        is_last = chunk.bytes_read >= self._file_size
        
        if response.status == RESUME_INCOMPLETE:
            if is_last:
                raise TransportError(
                    f"Server asked for more data after final chunk {chunk.index}",
                    status=response.status, body=response.body, headers=response.headers
                )
            self._check_range(response, chunk)
            self._logger.debug(f"Chunk {chunk.index} accepted, server expects more")
            return None
        
        if not response.ok:
            raise TransportError(
                f"Chunk {chunk.index} upload failed ({chunk.content_range(self._file_size)})",
                status=response.status, body=response.body, headers=response.headers
            )
        
        if not is_last:
            raise TransportError(
                f"Server completed the upload at chunk {chunk.index}, "
                f"before the final byte {self._file_size - 1}",
                status=response.status, body=response.body, headers=response.headers
            )
        
        location = response.header('location')
        if not location:
            raise TransportError(
                "Final chunk response carried no Location",
                status=response.status, body=response.body, headers=response.headers
            )
        
        self._location = location
        self._logger.debug(f"Final chunk {chunk.index} accepted, location {location}")
        return location
    
    def _check_range(self, response: TonResponse, chunk: ChunkDescriptor) -> None:
        """Compare a Range header echoed with 308 against what has been sent."""
        if not self._verify_ranges:
            return
        echoed = response.header('range')
        if echoed is None:
            return
        expected = f"bytes=0-{chunk.end}"
        if echoed.strip() != expected:
            raise TransportError(
                f"Server range {echoed!r} does not match {expected!r} after chunk {chunk.index}",
                status=response.status, body=response.body, headers=response.headers
            )
