"""Tests for point id normalisation."""

from __future__ import annotations

from uuid import UUID, uuid4, uuid5

import pytest

from qdrant_memory.memory.identifiers import POINT_ID_NAMESPACE, build_point_id, new_external_id


@pytest.mark.parametrize("external_id", ["abc", "memory-42", str(uuid4()), "한국어 id"])
def test_build_point_id_is_deterministic_uuid(external_id):
    first = build_point_id(external_id)
    second = build_point_id(external_id)

    assert first == second
    parsed = UUID(first)
    assert parsed.version == 5
    assert str(parsed) == first


def test_build_point_id_uses_nil_namespace():
    assert POINT_ID_NAMESPACE == UUID(int=0)
    assert build_point_id("abc") == str(uuid5(UUID(int=0), "abc"))


def test_distinct_ids_map_to_distinct_points():
    assert build_point_id("a") != build_point_id("b")


def test_existing_uuid_is_still_rehashed():
    external_id = str(uuid4())
    assert build_point_id(external_id) != external_id


def test_new_external_id_is_random_uuid4():
    first = new_external_id()
    assert UUID(first).version == 4
    assert first != new_external_id()
