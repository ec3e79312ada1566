"""Storage backends for memory and knowledge records."""

from .base import BaseMemoryAdapter, UnsupportedOperationsMixin
from .qdrant_adapter import QdrantMemoryAdapter

__all__ = [
    "BaseMemoryAdapter",
    "QdrantMemoryAdapter",
    "UnsupportedOperationsMixin",
]
