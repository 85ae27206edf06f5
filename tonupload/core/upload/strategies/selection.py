"""Choosing between single-shot and multi-part upload."""
from ..models import UploadStrategy


def select_strategy(file_size: int, threshold: int) -> UploadStrategy:
    """
    Pick the upload strategy for a file.
    
    Strictly smaller than threshold goes up in one request; a file of
    exactly threshold bytes already takes the multi-part path.
    """
    if file_size < threshold:
        return UploadStrategy.SINGLE
    return UploadStrategy.MULTIPART
