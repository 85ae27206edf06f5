"""
Custom exceptions for TON transfers.

Every error a transfer can surface derives from TonError so the CLI can
report it with one handler.
"""
from typing import Optional, Mapping


class TonError(Exception):
    """Base exception for all tonupload errors."""
    
    def __init__(self, message: str, status: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            status: HTTP status code (if available)
        """
        self.status = status
        super().__init__(message)


class ConfigError(TonError):
    """Invalid credentials, arguments, bucket name or local file."""
    pass


class FileError(TonError):
    """Local file cannot be read, or shrank while it was being read."""
    pass


class TransportError(TonError):
    """
    Raised for connection failures and unexpected HTTP responses.
    
    Carries whatever the server sent back so the user can see it.
    """
    
    DETAIL_LIMIT = 500
    
    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: bytes = b'',
        headers: Optional[Mapping[str, str]] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            status: HTTP status code (None for connection-level failures)
            body: Raw response body
            headers: Normalized response headers
        """
        self.body = body or b''
        self.headers = dict(headers or {})
        super().__init__(message, status)
    
    @property
    def detail(self) -> str:
        """Server-provided body text, truncated for display."""
        text = self.body.decode('utf-8', errors='replace').strip()
        if len(text) > self.DETAIL_LIMIT:
            text = text[:self.DETAIL_LIMIT] + '...'
        return text
    
    def __str__(self) -> str:
        message = super().__str__()
        if self.status is not None:
            message = f"{message} (HTTP {self.status})"
        detail = self.detail
        if detail:
            message = f"{message}: {detail}"
        return message


class VerificationMismatch(TonError):
    """Downloaded content digest differs from the local file digest."""
    
    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Digest mismatch: local {expected}, downloaded {actual}"
        )
