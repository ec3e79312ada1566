"""Memory subsystem: record mapping, query building and the Qdrant adapter."""

from .factory import QDRANT_PLUGIN, create_qdrant_adapter
from .identifiers import build_point_id, new_external_id
from .memory_records import (
    KnowledgeContent,
    KnowledgeMetadata,
    KnowledgeQuery,
    KnowledgeRecord,
    MemoryContent,
    MemoryQuery,
    MemoryRecord,
    StorePoint,
)
from .query_builder import build_filter, clean_vector
from .result_cache import ResultCache
from .storage import BaseMemoryAdapter, QdrantMemoryAdapter, UnsupportedOperationsMixin
from .text_normalizer import normalize_content

__all__ = [
    "BaseMemoryAdapter",
    "KnowledgeContent",
    "KnowledgeMetadata",
    "KnowledgeQuery",
    "KnowledgeRecord",
    "MemoryContent",
    "MemoryQuery",
    "MemoryRecord",
    "QDRANT_PLUGIN",
    "QdrantMemoryAdapter",
    "ResultCache",
    "StorePoint",
    "UnsupportedOperationsMixin",
    "build_filter",
    "build_point_id",
    "clean_vector",
    "create_qdrant_adapter",
    "new_external_id",
    "normalize_content",
]
