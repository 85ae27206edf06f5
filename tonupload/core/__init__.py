"""Core building blocks: configuration, auth, upload and download."""
from .config import TonConfig, SSLConfig, TimeoutConfig, validate_bucket
from .exceptions import TonError, ConfigError, FileError, TransportError, VerificationMismatch

__all__ = [
    'TonConfig',
    'SSLConfig',
    'TimeoutConfig',
    'validate_bucket',
    'TonError',
    'ConfigError',
    'FileError',
    'TransportError',
    'VerificationMismatch',
]
