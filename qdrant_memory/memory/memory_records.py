"""Data contracts exchanged between the agent runtime and the Qdrant store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from qdrant_client import models


@dataclass(slots=True)
class MemoryContent:
    """Text of a memory plus any open-ended attributes (action, source, ...)."""

    text: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        payload = dict(self.extra)
        payload["text"] = self.text
        return payload

    @classmethod
    def from_payload(cls, payload: Any) -> "MemoryContent":
        if not isinstance(payload, dict):
            return cls()
        extra = {key: value for key, value in payload.items() if key != "text"}
        text = payload.get("text")
        return cls(text=text if isinstance(text, str) else "", extra=extra)


@dataclass(slots=True)
class MemoryRecord:
    """A conversational memory owned by an agent within a room."""

    content: MemoryContent
    room_id: Optional[str] = None
    user_id: Optional[str] = None
    agent_id: Optional[str] = None
    id: Optional[str] = None
    type: Optional[str] = None
    embedding: Optional[List[float]] = None
    unique: Optional[bool] = None
    created_at: Optional[int] = None
    similarity: Optional[float] = None


@dataclass(slots=True)
class KnowledgeMetadata:
    """Chunking metadata attached to a knowledge item."""

    is_main: bool = False
    original_id: Optional[str] = None
    chunk_index: Optional[int] = None
    is_shared: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    _FIELD_KEYS = ("isMain", "originalId", "chunkIndex", "isShared")

    def to_payload(self) -> Dict[str, Any]:
        payload = dict(self.extra)
        payload.update(
            {
                "isMain": self.is_main,
                "originalId": self.original_id,
                "chunkIndex": self.chunk_index,
                "isShared": self.is_shared,
            }
        )
        return payload

    @classmethod
    def from_payload(cls, payload: Any) -> "KnowledgeMetadata":
        if not isinstance(payload, dict):
            return cls()
        chunk_index = payload.get("chunkIndex")
        original_id = payload.get("originalId")
        return cls(
            is_main=bool(payload.get("isMain", False)),
            original_id=str(original_id) if original_id is not None else None,
            chunk_index=int(chunk_index) if isinstance(chunk_index, (int, float)) else None,
            is_shared=bool(payload.get("isShared", False)),
            extra={key: value for key, value in payload.items() if key not in cls._FIELD_KEYS},
        )


@dataclass(slots=True)
class KnowledgeContent:
    text: str = ""
    metadata: KnowledgeMetadata = field(default_factory=KnowledgeMetadata)


@dataclass(slots=True)
class KnowledgeRecord:
    """A retrievable knowledge chunk, optionally shared across agents."""

    id: str
    content: KnowledgeContent
    agent_id: Optional[str] = None
    embedding: Optional[List[float]] = None
    created_at: Optional[int] = None
    similarity: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the record into JSON-compatible primitives."""
        return {
            "id": self.id,
            "agentId": self.agent_id,
            "content": {
                "text": self.content.text,
                "metadata": self.content.metadata.to_payload(),
            },
            "embedding": list(self.embedding) if self.embedding is not None else None,
            "createdAt": self.created_at,
            "similarity": self.similarity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KnowledgeRecord":
        content = data.get("content") or {}
        embedding = data.get("embedding")
        return cls(
            id=str(data["id"]),
            agent_id=data.get("agentId"),
            content=KnowledgeContent(
                text=str(content.get("text") or ""),
                metadata=KnowledgeMetadata.from_payload(content.get("metadata")),
            ),
            embedding=[float(value) for value in embedding] if embedding is not None else None,
            created_at=data.get("createdAt"),
            similarity=data.get("similarity"),
        )


@dataclass(slots=True)
class StorePoint:
    """Physical unit written to the collection."""

    id: str
    vector: List[float]
    payload: Dict[str, Any]

    def to_point_struct(self) -> models.PointStruct:
        return models.PointStruct(id=self.id, vector=list(self.vector), payload=dict(self.payload))


@dataclass(slots=True)
class MemoryQuery:
    """Structured parameters shared by memory listing and search operations."""

    table_name: Optional[str] = None
    room_id: Optional[str] = None
    agent_id: Optional[str] = None
    unique: Optional[bool] = None
    start: Optional[int] = None
    end: Optional[int] = None
    count: Optional[int] = None
    match_threshold: Optional[float] = None
    match_count: Optional[int] = None
    embedding: Optional[Sequence[float]] = None


@dataclass(slots=True)
class KnowledgeQuery:
    agent_id: str
    embedding: Sequence[float]
    ids: Sequence[str] = field(default_factory=tuple)


__all__ = [
    "KnowledgeContent",
    "KnowledgeMetadata",
    "KnowledgeQuery",
    "KnowledgeRecord",
    "MemoryContent",
    "MemoryQuery",
    "MemoryRecord",
    "StorePoint",
]
