"""Qdrant-backed implementation of the memory adapter."""

from __future__ import annotations

import json
from typing import Any, List, Optional, Sequence

from qdrant_client import AsyncQdrantClient, models

from qdrant_memory.core.config import (
    DEFAULT_COLLECTION,
    PORT_KEY,
    VECTOR_SIZE_KEY,
    QdrantSettings,
    ensure_connection_settings,
    parse_int_setting,
)
from qdrant_memory.core.exceptions import QueryValidationError
from qdrant_memory.core.logger import get_logger

from ..identifiers import build_point_id
from ..memory_records import KnowledgeQuery, KnowledgeRecord, MemoryQuery, MemoryRecord
from ..query_builder import build_filter, clean_vector
from ..record_mapper import (
    MEMORY_DEFAULTS,
    knowledge_to_point,
    memory_to_point,
    point_to_knowledge,
    point_to_memory,
)
from ..result_cache import ResultCache
from ..text_normalizer import normalize_content
from .base import BaseMemoryAdapter, UnsupportedOperationsMixin

DUPLICATE_MATCH_THRESHOLD = 0.95
DEFAULT_LIST_COUNT = 100
DEFAULT_SEARCH_COUNT = 10


class QdrantMemoryAdapter(UnsupportedOperationsMixin, BaseMemoryAdapter):
    """Stores memories and knowledge as points in a single Qdrant collection."""

    def __init__(
        self,
        url: str,
        api_key: str,
        port: int,
        vector_size: int,
        *,
        collection_name: str = DEFAULT_COLLECTION,
        client: Any = None,
    ) -> None:
        ensure_connection_settings(url, api_key, port, vector_size)
        parsed_port = parse_int_setting(PORT_KEY, port)
        parsed_size = parse_int_setting(VECTOR_SIZE_KEY, vector_size)
        self._logger = get_logger(self.__class__.__name__)
        if client is None:
            self._logger.info("Creating Qdrant client for %s", url)
            client = AsyncQdrantClient(url=url, api_key=api_key, port=parsed_port)
        self._client = client
        self._cache = ResultCache()
        self.collection_name = collection_name
        self.vector_size = parsed_size

    @classmethod
    def from_settings(cls, settings: QdrantSettings, *, client: Any = None) -> "QdrantMemoryAdapter":
        return cls(
            settings.url,
            settings.api_key,
            settings.port,
            settings.vector_size,
            collection_name=settings.collection_name,
            client=client,
        )

    @property
    def client(self) -> Any:
        return self._client

    @staticmethod
    def preprocess(text: Any) -> str:
        return normalize_content(text)

    async def init(self) -> None:
        response = await self._client.get_collections()
        names = {collection.name for collection in response.collections}
        if self.collection_name in names:
            self._logger.info("Collection %s already exists", self.collection_name)
            return

        self._logger.info("Creating collection %s (size=%d, cosine)", self.collection_name, self.vector_size)
        await self._client.create_collection(
            collection_name=self.collection_name,
            vectors_config=models.VectorParams(size=self.vector_size, distance=models.Distance.COSINE),
        )

    async def close(self) -> None:
        await self._client.close()

    # ------------------------------------------------------------------
    # Knowledge
    # ------------------------------------------------------------------
    async def create_knowledge(self, item: KnowledgeRecord) -> None:
        self._logger.info("Upserting knowledge %s", item.id)
        point = knowledge_to_point(item)
        await self._client.upsert(
            collection_name=self.collection_name,
            points=[point.to_point_struct()],
            wait=True,
        )

    async def get_knowledge(
        self,
        *,
        id: Optional[str] = None,
        agent_id: Optional[str] = None,
        query: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[KnowledgeRecord]:
        """Return the knowledge item stored under ``id``.

        ``agent_id``, ``query`` and ``limit`` are accepted for interface
        compatibility; lookup is by id only.
        """
        if not id:
            return []
        return await self._retrieve_knowledge([id])

    async def search_knowledge(self, query: KnowledgeQuery) -> List[KnowledgeRecord]:
        """Return knowledge for ``query.ids``, served from the cache on repeat calls.

        Results are keyed by agent and embedding only; a cache hit is returned
        as stored even if ``ids`` differ from the original call.
        """
        cache_key = self._knowledge_cache_key(query.agent_id, query.embedding)
        cached = await self.get_cache(key=cache_key, agent_id=query.agent_id)
        if cached:
            self._logger.debug("Knowledge search cache hit for agent %s", query.agent_id)
            return [KnowledgeRecord.from_dict(entry) for entry in json.loads(cached)]

        results = await self._retrieve_knowledge(query.ids)
        self._logger.debug("Knowledge search returned %d item(s)", len(results))
        await self.set_cache(
            key=cache_key,
            agent_id=query.agent_id,
            value=json.dumps([record.to_dict() for record in results]),
        )
        return results

    async def _retrieve_knowledge(self, ids: Sequence[str]) -> List[KnowledgeRecord]:
        rows = await self._client.retrieve(
            collection_name=self.collection_name,
            ids=[build_point_id(external_id) for external_id in ids],
            with_payload=True,
            with_vectors=True,
        )
        return [point_to_knowledge(row) for row in rows]

    @staticmethod
    def _knowledge_cache_key(agent_id: str, embedding: Sequence[float]) -> str:
        return f"{agent_id}:{','.join(str(float(value)) for value in embedding)}"

    # ------------------------------------------------------------------
    # Memories
    # ------------------------------------------------------------------
    async def create_memory(self, item: MemoryRecord, table_name: str, unique: Optional[bool] = None) -> None:
        """Upsert ``item`` into ``table_name``.

        When ``unique`` is not given and the memory has an embedding, it is
        flagged unique only if no memory in the same room and table scores
        above ``DUPLICATE_MATCH_THRESHOLD``. Concurrent writers can both pass
        this check.
        """
        self._logger.debug(
            "Creating memory",
            extra={
                "memory_id": item.id,
                "embedding_length": len(item.embedding) if item.embedding is not None else None,
                "content_length": len(item.content.text),
            },
        )

        resolved_unique = unique if unique is not None else MEMORY_DEFAULTS["unique"]
        if unique is None and item.embedding is not None:
            similar = await self.search_memories_by_embedding(
                item.embedding,
                MemoryQuery(
                    table_name=table_name,
                    room_id=item.room_id,
                    match_threshold=DUPLICATE_MATCH_THRESHOLD,
                    count=1,
                ),
            )
            resolved_unique = not similar

        point = memory_to_point(
            item,
            table_name=table_name,
            resolved_unique=resolved_unique,
            vector_size=self.vector_size,
        )
        await self._client.upsert(
            collection_name=self.collection_name,
            points=[point.to_point_struct()],
            wait=True,
        )

    async def get_memories(self, query: MemoryQuery) -> List[MemoryRecord]:
        if not query.table_name:
            raise QueryValidationError("table_name is required")
        if not query.room_id:
            raise QueryValidationError("room_id is required")

        points, _next_offset = await self._client.scroll(
            collection_name=self.collection_name,
            scroll_filter=build_filter(query),
            limit=query.count or DEFAULT_LIST_COUNT,
            with_payload=True,
            with_vectors=True,
        )
        return [point_to_memory(point) for point in points or []]

    async def search_memories(self, query: MemoryQuery) -> List[MemoryRecord]:
        if query.embedding is None:
            raise QueryValidationError("embedding is required")
        if not query.table_name:
            raise QueryValidationError("table_name is required")
        if not query.room_id:
            raise QueryValidationError("room_id is required")
        if not query.agent_id:
            raise QueryValidationError("agent_id is required")

        response = await self._client.query_points(
            collection_name=self.collection_name,
            query=[float(value) for value in query.embedding],
            limit=query.match_count or DEFAULT_SEARCH_COUNT,
            score_threshold=query.match_threshold,
            query_filter=build_filter(
                MemoryQuery(
                    table_name=query.table_name,
                    room_id=query.room_id,
                    agent_id=query.agent_id,
                    unique=query.unique,
                )
            ),
            with_payload=True,
            with_vectors=True,
        )
        return [point_to_memory(point, score=point.score) for point in response.points]

    async def search_memories_by_embedding(
        self,
        embedding: Sequence[float],
        query: MemoryQuery,
    ) -> List[MemoryRecord]:
        self._logger.debug("Incoming vector", extra={"length": len(embedding), "sample": list(embedding[:5])})

        if len(embedding) != self.vector_size:
            raise QueryValidationError(
                f"Invalid embedding dimension: expected {self.vector_size}, got {len(embedding)}"
            )

        vector = clean_vector(embedding)
        query_filter = build_filter(
            MemoryQuery(
                table_name=query.table_name,
                unique=query.unique,
                agent_id=query.agent_id,
                room_id=query.room_id,
            )
        )

        response = await self._client.query_points(
            collection_name=self.collection_name,
            query=vector,
            limit=query.count or DEFAULT_SEARCH_COUNT,
            score_threshold=query.match_threshold or 0,
            query_filter=query_filter,
            with_payload=True,
            with_vectors=True,
        )
        points = response.points
        self._logger.debug(
            "Search results",
            extra={"count": len(points), "first_score": points[0].score if points else None},
        )
        return [point_to_memory(point, score=point.score or 0) for point in points]

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------
    async def get_cache(self, *, key: str, agent_id: str) -> Optional[str]:
        return self._cache.get(agent_id, key)

    async def set_cache(self, *, key: str, agent_id: str, value: str) -> bool:
        return self._cache.set(agent_id, key, value)

    async def delete_cache(self, *, key: str, agent_id: str) -> bool:
        return self._cache.delete(agent_id, key)


__all__ = [
    "DEFAULT_LIST_COUNT",
    "DEFAULT_SEARCH_COUNT",
    "DUPLICATE_MATCH_THRESHOLD",
    "QdrantMemoryAdapter",
]
