"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import AsyncIterator, Tuple, Union
import mimetypes

import aiofiles

from ..models import ChunkDescriptor
from ..strategies import FixedSizeChunkingStrategy
from ...exceptions import FileError
from ...logging import get_logger

DEFAULT_CONTENT_TYPE = 'text/plain'


def detect_content_type(file_path: Union[str, Path]) -> str:
    """
    Guess a MIME type from the file name.
    
    Never fails: anything unrecognised is sent as text/plain.
    """
    try:
        content_type, _ = mimetypes.guess_type(str(file_path))
    except (TypeError, ValueError):
        content_type = None
    return content_type or DEFAULT_CONTENT_TYPE


class FileValidator:
    """
    Validates files before upload.
    
    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """
    
    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.
        
        Args:
            file_path: Path to the file
            
        Returns:
            Tuple of (validated Path, file size in bytes)
            
        Raises:
            FileError: If the path is missing, not a regular file, or unreadable
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path
        
        if not path.exists():
            raise FileError(f"File not found: {path}")
        
        if not path.is_file():
            raise FileError(f"Path is not a file: {path}")
        
        try:
            file_size = path.stat().st_size
        except OSError as e:
            raise FileError(f"Cannot stat {path}: {e}") from e
        
        return path, file_size


class ChunkReader:
    """
    Reads a file as a sequence of fixed-size windows.
    
    Each ``async for`` opens the file afresh and reads it front to back;
    only one window is held in memory at a time. The handle is closed when
    iteration finishes, fails, or the iterator is closed early.
    
    Example:
        >>> reader = ChunkReader(path, chunk_size=8 * 1024 * 1024, file_size=size)
        >>> async for chunk, data in reader:
        ...     print(chunk.content_range(size))
    """
    
    def __init__(self, file_path: Union[str, Path], chunk_size: int, file_size: int):
        """
        Initialize file reader.
        
        Args:
            file_path: File to read
            chunk_size: Window size in bytes
            file_size: Size measured when the upload started
        """
        self._file_path = Path(file_path)
        self._chunking = FixedSizeChunkingStrategy(chunk_size)
        self._file_size = file_size
        self._logger = get_logger('tonupload.upload.file')
    
    @property
    def file_size(self) -> int:
        return self._file_size
    
    @property
    def chunk_size(self) -> int:
        return self._chunking.chunk_size
    
    @property
    def total_chunks(self) -> int:
        return self._chunking.count_chunks(self._file_size)
    
    def __aiter__(self) -> AsyncIterator[Tuple[ChunkDescriptor, bytes]]:
        return self.iterate()
    
    async def iterate(self) -> AsyncIterator[Tuple[ChunkDescriptor, bytes]]:
        try:
            handle = await aiofiles.open(self._file_path, 'rb')
        except OSError as e:
            raise FileError(f"Cannot open {self._file_path}: {e}") from e
        
        try:
            for chunk in self._chunking.iter_chunks(self._file_size):
                try:
                    data = await handle.read(chunk.length)
                except OSError as e:
                    raise FileError(
                        f"Failed to read chunk {chunk.index} of {self._file_path}: {e}"
                    ) from e
                
                if len(data) != chunk.length:
                    raise FileError(
                        f"{self._file_path} shrank during upload: chunk {chunk.index} "
                        f"expected {chunk.length} bytes at offset {chunk.offset}, got {len(data)}"
                    )
                
                self._logger.debug(f"Read chunk {chunk.index}: {chunk.offset}-{chunk.end} ({chunk.length} bytes)")
                yield chunk, data
        finally:
            await handle.close()


def iter_chunks(file_path: Union[str, Path], chunk_size: int, file_size: int) -> ChunkReader:
    """Shorthand for ChunkReader(file_path, chunk_size, file_size)."""
    return ChunkReader(file_path, chunk_size, file_size)


async def read_file(file_path: Union[str, Path], file_size: int) -> bytes:
    """
    Read a whole (small) file, insisting it still has file_size bytes.
    
    Raises:
        FileError: If the file is unreadable or its size changed
    """
    try:
        async with aiofiles.open(file_path, 'rb') as f:
            data = await f.read()
    except OSError as e:
        raise FileError(f"Cannot read {file_path}: {e}") from e
    if len(data) != file_size:
        raise FileError(f"{file_path} changed size during upload: expected {file_size} bytes, got {len(data)}")
    return data
