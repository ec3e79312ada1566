"""Shared fixtures: an in-memory stand-in for ``AsyncQdrantClient``."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from qdrant_client import models

from qdrant_memory.memory.storage import QdrantMemoryAdapter

VECTOR_SIZE = 3


class FakeQdrantClient:
    """Records every call and serves canned search/scroll results."""

    def __init__(self) -> None:
        self.collections: set[str] = set()
        self.points: dict[str, models.PointStruct] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.query_results: list[models.ScoredPoint] = []
        self.scroll_results: list[models.Record] = []
        self.closed = False

    def calls_to(self, name: str) -> list[dict[str, Any]]:
        return [kwargs for called, kwargs in self.calls if called == name]

    async def get_collections(self):
        self.calls.append(("get_collections", {}))
        return SimpleNamespace(collections=[SimpleNamespace(name=name) for name in sorted(self.collections)])

    async def create_collection(self, collection_name: str, **kwargs):
        self.calls.append(("create_collection", {"collection_name": collection_name, **kwargs}))
        self.collections.add(collection_name)
        return True

    async def upsert(self, collection_name: str, points, wait: bool = True, **kwargs):
        self.calls.append(("upsert", {"collection_name": collection_name, "points": points, "wait": wait}))
        for point in points:
            self.points[str(point.id)] = point

    async def query_points(self, collection_name: str, **kwargs):
        self.calls.append(("query_points", {"collection_name": collection_name, **kwargs}))
        return SimpleNamespace(points=list(self.query_results))

    async def scroll(self, collection_name: str, **kwargs):
        self.calls.append(("scroll", {"collection_name": collection_name, **kwargs}))
        return list(self.scroll_results), None

    async def retrieve(self, collection_name: str, ids, **kwargs):
        self.calls.append(("retrieve", {"collection_name": collection_name, "ids": list(ids), **kwargs}))
        return [
            models.Record(id=point.id, payload=point.payload, vector=point.vector)
            for point_id, point in self.points.items()
            if point_id in {str(item) for item in ids}
        ]

    async def close(self):
        self.calls.append(("close", {}))
        self.closed = True


@pytest.fixture(name="fake_client")
def fixture_fake_client() -> FakeQdrantClient:
    return FakeQdrantClient()


@pytest.fixture(name="adapter")
def fixture_adapter(fake_client: FakeQdrantClient) -> QdrantMemoryAdapter:
    return QdrantMemoryAdapter(
        "http://localhost",
        "test-key",
        6333,
        VECTOR_SIZE,
        collection_name="memories",
        client=fake_client,
    )
