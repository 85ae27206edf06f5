"""
Protocol definitions for upload module.

The coordinator depends on these, not on aiohttp or the filesystem, so
tests can hand it fakes.
"""
from typing import Protocol, Dict, Optional, Tuple, AsyncIterator

from ..auth.models import TonResponse
from .models import ChunkDescriptor


class SignerProtocol(Protocol):
    """Anything that can send an authorized request."""
    
    async def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: bytes = b''
    ) -> TonResponse:
        """
        Send one request.
        
        Returns:
            Response with normalized headers
        """
        ...


class ChunkSourceProtocol(Protocol):
    """Lazy source of file windows."""
    
    def __aiter__(self) -> AsyncIterator[Tuple[ChunkDescriptor, bytes]]:
        ...
