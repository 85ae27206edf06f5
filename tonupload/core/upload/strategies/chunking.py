"""
Chunking strategies for file uploads.

The server dictates the chunk size of a resumable session, so the only
strategy needed is fixed-size windows with a shorter tail.
"""
from abc import ABC, abstractmethod
from typing import Iterator, List, Tuple

from ..models import ChunkDescriptor


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""
    
    @abstractmethod
    def iter_chunks(self, file_size: int) -> Iterator[ChunkDescriptor]:
        """Lazily describe the chunks of a file."""
        pass
    
    def calculate_chunks(self, file_size: int) -> List[Tuple[int, int]]:
        """
        Calculate chunk boundaries for a file.
        
        Returns:
            List of (start, end) tuples, end exclusive
        """
        return [(c.offset, c.offset + c.length) for c in self.iter_chunks(file_size)]
    
    def count_chunks(self, file_size: int) -> int:
        return sum(1 for _ in self.iter_chunks(file_size))


class FixedSizeChunkingStrategy(BaseChunkingStrategy):
    """
    Fixed-size windows; the last one holds whatever remains.
    """
    
    def __init__(self, chunk_size: int):
        """
        Initialize with chunk size.
        
        Args:
            chunk_size: Size of each chunk in bytes
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size
    
    def iter_chunks(self, file_size: int) -> Iterator[ChunkDescriptor]:
        """
        Yield one descriptor per window, offsets contiguous from 0.
        
        Args:
            file_size: Total file size in bytes
        """
        if file_size < 0:
            raise ValueError("File size cannot be negative")
        
        offset = 0
        index = 0
        while offset < file_size:
            length = min(self.chunk_size, file_size - offset)
            index += 1
            yield ChunkDescriptor(
                index=index,
                offset=offset,
                length=length,
                bytes_read=offset + length
            )
            offset += length
    
    def count_chunks(self, file_size: int) -> int:
        return -(-file_size // self.chunk_size)
