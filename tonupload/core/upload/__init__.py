"""
Upload module for TON.

Single-shot uploads for small files, resumable multi-part sessions for
everything at or above the single-chunk threshold.
"""
from .coordinator import UploadCoordinator
from .models import (
    UploadStrategy,
    UploadTarget,
    ChunkDescriptor,
    UploadSession,
    UploadResult,
    UploadProgress,
)
from .protocols import SignerProtocol, ChunkSourceProtocol
from .services import ChunkReader, iter_chunks, detect_content_type
from .strategies import FixedSizeChunkingStrategy, select_strategy

__all__ = [
    # Main classes
    'UploadCoordinator',
    'ChunkReader',
    'iter_chunks',
    'detect_content_type',
    'FixedSizeChunkingStrategy',
    'select_strategy',
    
    # Models
    'UploadStrategy',
    'UploadTarget',
    'ChunkDescriptor',
    'UploadSession',
    'UploadResult',
    'UploadProgress',
    
    # Protocols
    'SignerProtocol',
    'ChunkSourceProtocol',
]
