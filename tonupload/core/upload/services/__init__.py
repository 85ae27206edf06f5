"""Upload services module."""
from .file_service import FileValidator, ChunkReader, iter_chunks, read_file, detect_content_type
from .session_service import SessionInitiator
from .chunk_service import ChunkUploader, RESUME_INCOMPLETE

__all__ = [
    'FileValidator',
    'ChunkReader',
    'iter_chunks',
    'read_file',
    'detect_content_type',
    'SessionInitiator',
    'ChunkUploader',
    'RESUME_INCOMPLETE',
]
