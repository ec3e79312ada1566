"""Qdrant-backed memory and knowledge storage for agent runtimes."""

from .memory import QdrantMemoryAdapter, create_qdrant_adapter  # noqa: F401

__all__ = ["QdrantMemoryAdapter", "create_qdrant_adapter"]
