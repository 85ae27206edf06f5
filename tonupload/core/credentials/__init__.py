"""
Credential storage for TON authentication.

Credentials are loaded before any network activity; a missing or incomplete
profile is a ConfigError.
"""
from .protocols import CredentialStore
from .models import Credentials
from .json_store import JSONCredentialStore, default_credentials_path
from .memory_store import MemoryCredentialStore

__all__ = [
    'CredentialStore',
    'Credentials',
    'JSONCredentialStore',
    'MemoryCredentialStore',
    'default_credentials_path',
]
