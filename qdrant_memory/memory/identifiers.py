"""Identifier helpers mapping external ids onto Qdrant point ids."""

from __future__ import annotations

from uuid import UUID, uuid4, uuid5

# Qdrant only accepts unsigned integers or UUIDs as point ids.
POINT_ID_NAMESPACE = UUID("00000000-0000-0000-0000-000000000000")


def build_point_id(external_id: str) -> str:
    """Return the name-based UUID5 used as the point id for ``external_id``."""
    return str(uuid5(POINT_ID_NAMESPACE, str(external_id)))


def new_external_id() -> str:
    return str(uuid4())


__all__ = ["POINT_ID_NAMESPACE", "build_point_id", "new_external_id"]
