"""Download and verification of stored TON objects."""
from .downloader import Downloader, require_app_auth
from .verifier import TransferVerifier, file_digest

__all__ = [
    'Downloader',
    'TransferVerifier',
    'file_digest',
    'require_app_auth',
]
