"""Upload data models."""
from .upload_models import (
    UploadStrategy,
    UploadTarget,
    ChunkDescriptor,
    UploadSession,
    UploadResult,
    UploadProgress,
)

__all__ = [
    'UploadStrategy',
    'UploadTarget',
    'ChunkDescriptor',
    'UploadSession',
    'UploadResult',
    'UploadProgress',
]
