"""Translation between domain records and Qdrant points.

Every default applied while mapping lives in ``KNOWLEDGE_DEFAULTS`` or
``MEMORY_DEFAULTS`` so the fallback for a field is decided in exactly one place.

Knowledge text is written under ``content.text`` but read back from the
``description`` payload key.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Mapping, Optional

from .identifiers import build_point_id, new_external_id
from .memory_records import (
    KnowledgeContent,
    KnowledgeMetadata,
    KnowledgeRecord,
    MemoryContent,
    MemoryRecord,
    StorePoint,
)

KNOWLEDGE_DEFAULTS: Mapping[str, Any] = {
    "isMain": False,
    "originalId": None,
    "chunkIndex": None,
    "isShared": False,
    # Shared knowledge is stored without an owner.
    "sharedAgentId": None,
    "description": "",
}

MEMORY_DEFAULTS: Mapping[str, Any] = {
    # Without an embedding there is nothing to compare against.
    "unique": True,
    "vectorFill": 0.0,
}


def now_ms() -> int:
    return int(time.time() * 1000)


def knowledge_to_point(item: KnowledgeRecord) -> StorePoint:
    metadata = item.content.metadata
    is_shared = bool(_or_default(metadata.is_shared, "isShared"))

    payload: Dict[str, Any] = {
        "id": item.id,
        "agentId": KNOWLEDGE_DEFAULTS["sharedAgentId"] if is_shared else item.agent_id,
        "content": {
            "text": item.content.text,
            "metadata": metadata.to_payload(),
        },
        "createdAt": item.created_at if item.created_at else now_ms(),
        "isMain": _or_default(metadata.is_main, "isMain"),
        "originalId": _or_default(metadata.original_id, "originalId"),
        "chunkIndex": _or_default(metadata.chunk_index, "chunkIndex"),
        "isShared": is_shared,
    }
    return StorePoint(
        id=build_point_id(item.id),
        vector=_as_floats(item.embedding) or [],
        payload=payload,
    )


def memory_to_point(
    item: MemoryRecord,
    *,
    table_name: str,
    resolved_unique: Optional[bool],
    vector_size: int,
) -> StorePoint:
    """Map a memory onto a point, assigning a fresh id when the memory has none.

    ``item.unique`` wins over ``resolved_unique``; the creation timestamp is
    always the write time.
    """
    external_id = item.id or new_external_id()
    if item.unique is not None:
        unique = item.unique
    elif resolved_unique is not None:
        unique = resolved_unique
    else:
        unique = MEMORY_DEFAULTS["unique"]

    vector = _as_floats(item.embedding)
    if vector is None:
        vector = [MEMORY_DEFAULTS["vectorFill"]] * vector_size

    payload: Dict[str, Any] = {
        "id": external_id,
        "type": table_name,
        "content": item.content.to_payload(),
        "userId": item.user_id,
        "roomId": item.room_id,
        "agentId": item.agent_id,
        "unique": unique,
        "createdAt": now_ms(),
    }
    return StorePoint(id=build_point_id(external_id), vector=vector, payload=payload)


def point_to_knowledge(point: Any, *, score: Optional[float] = None) -> KnowledgeRecord:
    payload = _payload_of(point)
    external_id = payload.get("id") or point.id
    return KnowledgeRecord(
        id=str(external_id),
        agent_id=payload.get("agentId") or None,
        content=KnowledgeContent(
            text=str(payload.get("description") or KNOWLEDGE_DEFAULTS["description"]),
            metadata=KnowledgeMetadata.from_payload(payload),
        ),
        embedding=_vector_of(point),
        created_at=payload.get("createdAt"),
        similarity=score,
    )


def point_to_memory(point: Any, *, score: Optional[float] = None) -> MemoryRecord:
    payload = _payload_of(point)
    unique = payload.get("unique")
    return MemoryRecord(
        id=payload.get("id"),
        type=payload.get("type"),
        content=MemoryContent.from_payload(payload.get("content")),
        embedding=_vector_of(point),
        user_id=payload.get("userId"),
        room_id=payload.get("roomId"),
        agent_id=payload.get("agentId"),
        unique=unique if isinstance(unique, bool) else None,
        created_at=payload.get("createdAt"),
        similarity=score,
    )


def _or_default(value: Any, key: str) -> Any:
    return value if value is not None else KNOWLEDGE_DEFAULTS[key]


def _payload_of(point: Any) -> Dict[str, Any]:
    payload = getattr(point, "payload", None)
    return dict(payload) if isinstance(payload, dict) else {}


def _vector_of(point: Any) -> Optional[List[float]]:
    # Named (multi-vector) collections return a dict; this adapter only writes
    # the default unnamed vector.
    vector = getattr(point, "vector", None)
    if isinstance(vector, list) and vector:
        return [float(value) for value in vector]
    return None


def _as_floats(values: Any) -> Optional[List[float]]:
    if values is None:
        return None
    return [float(value) for value in values]


__all__ = [
    "KNOWLEDGE_DEFAULTS",
    "MEMORY_DEFAULTS",
    "knowledge_to_point",
    "memory_to_point",
    "now_ms",
    "point_to_knowledge",
    "point_to_memory",
]
