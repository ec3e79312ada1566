"""Payload filters and query vectors for Qdrant searches."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np
from qdrant_client import models

from .memory_records import MemoryQuery

VECTOR_DECIMALS = 6


def build_filter(query: MemoryQuery) -> models.Filter:
    """Return a conjunction of every condition present on ``query``.

    ``unique`` is matched against its lowercase string form and only when set
    to ``True``.
    """
    must: List[models.Condition] = []

    if query.table_name:
        must.append(_match("type", query.table_name))
    if query.room_id:
        must.append(_match("roomId", query.room_id))
    if query.agent_id:
        must.append(_match("agentId", query.agent_id))
    if query.unique:
        must.append(_match("unique", str(bool(query.unique)).lower()))
    if query.start is not None or query.end is not None:
        must.append(
            models.FieldCondition(
                key="createdAt",
                range=models.Range(gte=query.start, lte=query.end),
            )
        )

    return models.Filter(must=must)


def clean_vector(embedding: Sequence[float]) -> List[float]:
    """Replace non-finite components with 0 and round to ``VECTOR_DECIMALS`` places."""
    vector = np.asarray(embedding, dtype=np.float64)
    vector = np.where(np.isfinite(vector), vector, 0.0)
    return np.round(vector, VECTOR_DECIMALS).tolist()


def _match(key: str, value: str) -> models.FieldCondition:
    return models.FieldCondition(key=key, match=models.MatchValue(value=value))


__all__ = ["VECTOR_DECIMALS", "build_filter", "clean_vector"]
