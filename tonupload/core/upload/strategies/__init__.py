"""Upload strategies."""
from .chunking import BaseChunkingStrategy, FixedSizeChunkingStrategy
from .selection import select_strategy

__all__ = [
    'BaseChunkingStrategy',
    'FixedSizeChunkingStrategy',
    'select_strategy',
]
