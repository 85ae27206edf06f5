"""
Credential storage protocol.
"""
from typing import Protocol, Optional, runtime_checkable
from .models import Credentials


@runtime_checkable
class CredentialStore(Protocol):
    """
    Protocol for credential storage implementations.
    
    Implementations can use a JSON file, memory, or any other backend.
    """
    
    def load(self) -> Optional[Credentials]:
        """
        Load credentials from storage.
        
        Returns:
            Credentials if stored, None otherwise
        """
        ...
    
    def save(self, credentials: Credentials) -> None:
        """Save credentials to storage."""
        ...
    
    def delete(self) -> None:
        """Delete stored credentials."""
        ...
    
    def exists(self) -> bool:
        """Check if credentials are stored."""
        ...
