"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class UploadStrategy(str, Enum):
    """How a file goes up: one request, or a resumable multi-part session."""
    SINGLE = 'single'
    MULTIPART = 'multipart'


@dataclass(frozen=True)
class UploadTarget:
    """
    Everything fixed at the start of one upload.
    
    Attributes:
        api_domain: API host
        bucket_name: Destination bucket
        file_path: Local file
        content_type: MIME type sent to the server
        file_size: Size measured before the first byte is sent
    """
    api_domain: str
    bucket_name: str
    file_path: Path
    content_type: str
    file_size: int


@dataclass(frozen=True)
class ChunkDescriptor:
    """
    One window of a file.
    
    Attributes:
        index: 1-based chunk number
        offset: First byte of the window
        length: Bytes in the window
        bytes_read: Bytes read so far, this window included
    
    Example:
        >>> chunk = ChunkDescriptor(index=1, offset=0, length=10, bytes_read=10)
        >>> chunk.content_range(25)
        'bytes 0-9/25'
    """
    index: int
    offset: int
    length: int
    bytes_read: int
    
    @property
    def end(self) -> int:
        """Last byte of the window (inclusive)."""
        return self.offset + self.length - 1
    
    def content_range(self, total: int) -> str:
        """Content-Range header value for this window."""
        return f"bytes {self.offset}-{self.end}/{total}"


@dataclass(frozen=True)
class UploadSession:
    """
    A resumable upload session negotiated with the server.
    
    Attributes:
        resumable_upload_url: Absolute URL chunks are PUT to
        negotiated_chunk_size: Chunk size dictated by the server
    """
    resumable_upload_url: str
    negotiated_chunk_size: int


@dataclass(frozen=True)
class UploadResult:
    """
    Result of a successful upload.
    
    Attributes:
        location: Stored object location returned by the server
        file_size: Bytes uploaded
        content_type: MIME type sent
        strategy: Single-shot or multi-part
        chunks: Number of requests that carried file data
    """
    location: str
    file_size: int
    content_type: str
    strategy: UploadStrategy
    chunks: int = 1


@dataclass
class UploadProgress:
    """
    Upload progress information.
    
    Attributes:
        total_chunks: Total number of chunks
        uploaded_chunks: Number of uploaded chunks
        total_bytes: Total file size
        uploaded_bytes: Bytes uploaded so far
    """
    total_chunks: int
    uploaded_chunks: int = 0
    total_bytes: int = 0
    uploaded_bytes: int = 0
    
    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage of bytes."""
        if self.total_bytes == 0:
            return 100.0 if self.is_complete else 0.0
        return (self.uploaded_bytes / self.total_bytes) * 100
    
    @property
    def is_complete(self) -> bool:
        """Returns True if upload is complete."""
        return self.uploaded_chunks >= self.total_chunks
