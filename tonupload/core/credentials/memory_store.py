"""
In-memory credential storage.
"""
from typing import Optional

from .protocols import CredentialStore
from .models import Credentials


class MemoryCredentialStore(CredentialStore):
    """
    In-memory credential storage for tests and one-off runs.
    
    Example:
        >>> store = MemoryCredentialStore(Credentials("ck", "cs"))
        >>> store.load().consumer_key
        'ck'
    """
    
    def __init__(self, credentials: Optional[Credentials] = None):
        self._data = credentials
    
    def load(self) -> Optional[Credentials]:
        return self._data
    
    def save(self, credentials: Credentials) -> None:
        self._data = credentials
    
    def delete(self) -> None:
        self._data = None
    
    def exists(self) -> bool:
        return self._data is not None
