"""
tonupload - Async Python client for the TON blob storage API.

Usage:
    >>> from tonupload import TonClient, AppAuth
    >>> 
    >>> async with TonClient(AppAuth("token")) as ton:
    ...     location = await ton.upload("movie.mp4", "my_bucket")
"""
import logging
from .client import TonClient, upload, verify, build_profile, resolve_profile, load_credentials

# Configuration
from .core.config import TonConfig, SSLConfig, TimeoutConfig

# Authentication
from .core.auth import UserAuth, AppAuth, AuthProfile, create_signer

# Credential storage
from .core.credentials import (
    CredentialStore,
    Credentials,
    JSONCredentialStore,
    MemoryCredentialStore
)

from .core.exceptions import (
    TonError,
    ConfigError,
    FileError,
    TransportError,
    VerificationMismatch
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for tonupload modules.
    
    This ensures that all tonupload loggers are properly configured
    to show log messages at the specified level.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'tonupload',
        'tonupload.client',
        'tonupload.wire',
        'tonupload.auth.token',
        'tonupload.credentials',
        'tonupload.upload',
        'tonupload.upload.coordinator',
        'tonupload.upload.session',
        'tonupload.upload.chunk',
        'tonupload.upload.file',
        'tonupload.download',
        'tonupload.download.verify',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'TonClient',
    'upload',
    'verify',
    'build_profile',
    'resolve_profile',
    'load_credentials',
    'TonConfig',
    'SSLConfig',
    'TimeoutConfig',
    'UserAuth',
    'AppAuth',
    'AuthProfile',
    'create_signer',
    'CredentialStore',
    'Credentials',
    'JSONCredentialStore',
    'MemoryCredentialStore',
    'TonError',
    'ConfigError',
    'FileError',
    'TransportError',
    'VerificationMismatch',
    'setup_logging',
]
