"""Logging utilities for tonupload modules."""

import logging

REDACTED = '<redacted>'


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.
    
    This ensures that loggers work with basicConfig() without needing
    explicit setup_logging() calls. The logger will:
    - Propagate to root logger (default behavior)
    - Only set a default level if root logger has no handlers
    
    Args:
        name: Logger name (typically __name__)
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    
    # Only set default level if root logger has no handlers
    # (i.e., basicConfig hasn't been called yet)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)
    
    return logger


def redact_headers(headers) -> dict:
    """Copy of headers safe for wire logs (Authorization value hidden)."""
    return {
        key: (REDACTED if key.lower() == 'authorization' else value)
        for key, value in dict(headers).items()
    }
