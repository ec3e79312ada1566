"""Interfaces for memory storage adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, NoReturn, Optional, Sequence

from qdrant_memory.core.exceptions import UnsupportedOperationError

from ..memory_records import KnowledgeQuery, KnowledgeRecord, MemoryQuery, MemoryRecord


class BaseMemoryAdapter(ABC):
    """Vector-backed memory, knowledge and cache operations an agent runtime relies on."""

    @abstractmethod
    async def init(self) -> None:
        """Prepare the backing collection."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying client."""

    @abstractmethod
    async def create_knowledge(self, item: KnowledgeRecord) -> None:
        """Persist or replace a knowledge item."""

    @abstractmethod
    async def get_knowledge(
        self,
        *,
        id: Optional[str] = None,
        agent_id: Optional[str] = None,
        query: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[KnowledgeRecord]:
        """Return knowledge items by id."""

    @abstractmethod
    async def search_knowledge(self, query: KnowledgeQuery) -> List[KnowledgeRecord]:
        """Return knowledge items for ``query``, possibly from cache."""

    @abstractmethod
    async def create_memory(self, item: MemoryRecord, table_name: str, unique: Optional[bool] = None) -> None:
        """Persist a memory in ``table_name``."""

    @abstractmethod
    async def get_memories(self, query: MemoryQuery) -> List[MemoryRecord]:
        """List memories of a room and table without similarity ranking."""

    @abstractmethod
    async def search_memories(self, query: MemoryQuery) -> List[MemoryRecord]:
        """Similarity search scoped to a room, table and agent."""

    @abstractmethod
    async def search_memories_by_embedding(
        self,
        embedding: Sequence[float],
        query: MemoryQuery,
    ) -> List[MemoryRecord]:
        """Similarity search for an explicit embedding."""

    @abstractmethod
    async def get_cache(self, *, key: str, agent_id: str) -> Optional[str]:
        """Return a cached value."""

    @abstractmethod
    async def set_cache(self, *, key: str, agent_id: str, value: str) -> bool:
        """Store a cached value."""

    @abstractmethod
    async def delete_cache(self, *, key: str, agent_id: str) -> bool:
        """Remove a cached value, reporting whether it existed."""


def _unsupported(operation: str) -> NoReturn:
    raise UnsupportedOperationError(operation)


class UnsupportedOperationsMixin:
    """Relational database operations a vector-only adapter does not provide.

    Each method raises ``UnsupportedOperationError`` so callers can tell an
    intentionally absent feature from an empty result.
    """

    async def create_account(self, account: Any) -> bool:
        _unsupported("create_account")

    async def get_account_by_id(self, user_id: str) -> Any:
        _unsupported("get_account_by_id")

    async def get_actor_details(self, *, room_id: str) -> List[Any]:
        _unsupported("get_actor_details")

    async def create_goal(self, goal: Any) -> None:
        _unsupported("create_goal")

    async def get_goals(self, **params: Any) -> List[Any]:
        _unsupported("get_goals")

    async def update_goal(self, goal: Any) -> None:
        _unsupported("update_goal")

    async def update_goal_status(self, *, goal_id: str, status: Any) -> None:
        _unsupported("update_goal_status")

    async def remove_goal(self, goal_id: str) -> None:
        _unsupported("remove_goal")

    async def remove_all_goals(self, room_id: str) -> None:
        _unsupported("remove_all_goals")

    async def create_room(self, room_id: Optional[str] = None) -> str:
        _unsupported("create_room")

    async def get_room(self, room_id: str) -> Optional[str]:
        _unsupported("get_room")

    async def remove_room(self, room_id: str) -> None:
        _unsupported("remove_room")

    async def get_rooms_for_participant(self, user_id: str) -> List[str]:
        _unsupported("get_rooms_for_participant")

    async def get_rooms_for_participants(self, user_ids: Sequence[str]) -> List[str]:
        _unsupported("get_rooms_for_participants")

    async def add_participant(self, user_id: str, room_id: str) -> bool:
        _unsupported("add_participant")

    async def remove_participant(self, user_id: str, room_id: str) -> bool:
        _unsupported("remove_participant")

    async def get_participants_for_account(self, user_id: str) -> List[Any]:
        _unsupported("get_participants_for_account")

    async def get_participants_for_room(self, room_id: str) -> List[str]:
        _unsupported("get_participants_for_room")

    async def get_participant_user_state(self, room_id: str, user_id: str) -> Optional[str]:
        _unsupported("get_participant_user_state")

    async def set_participant_user_state(self, room_id: str, user_id: str, state: Optional[str]) -> None:
        _unsupported("set_participant_user_state")

    async def create_relationship(self, *, user_a: str, user_b: str) -> bool:
        _unsupported("create_relationship")

    async def get_relationship(self, *, user_a: str, user_b: str) -> Any:
        _unsupported("get_relationship")

    async def get_relationships(self, *, user_id: str) -> List[Any]:
        _unsupported("get_relationships")

    async def log(self, *, body: dict, user_id: str, room_id: str, type: str) -> None:
        _unsupported("log")

    async def get_cached_embeddings(self, **params: Any) -> List[Any]:
        _unsupported("get_cached_embeddings")

    async def get_memory_by_id(self, memory_id: str) -> Optional[MemoryRecord]:
        _unsupported("get_memory_by_id")

    async def get_memories_by_ids(self, memory_ids: Sequence[str], table_name: Optional[str] = None) -> List[MemoryRecord]:
        _unsupported("get_memories_by_ids")

    async def get_memories_by_room_ids(self, *, table_name: str, agent_id: str, room_ids: Sequence[str]) -> List[MemoryRecord]:
        _unsupported("get_memories_by_room_ids")

    async def count_memories(self, room_id: str, unique: bool = True, table_name: str = "") -> int:
        _unsupported("count_memories")

    async def remove_memory(self, memory_id: str, table_name: str) -> None:
        _unsupported("remove_memory")

    async def remove_all_memories(self, room_id: str, table_name: str) -> None:
        _unsupported("remove_all_memories")

    async def remove_knowledge(self, id: str) -> None:
        _unsupported("remove_knowledge")

    async def clear_knowledge(self, agent_id: str, shared: Optional[bool] = None) -> None:
        _unsupported("clear_knowledge")

    async def process_file(self, *, path: str, content: str, type: str, is_shared: bool) -> None:
        _unsupported("process_file")


__all__ = ["BaseMemoryAdapter", "UnsupportedOperationsMixin"]
