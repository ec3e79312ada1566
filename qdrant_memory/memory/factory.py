"""Factory helpers for wiring the Qdrant adapter into an agent runtime."""

from __future__ import annotations

from typing import Any, Optional

from qdrant_memory.core.config import QdrantSettings
from qdrant_memory.core.logger import get_logger, setup_logging

from .storage import QdrantMemoryAdapter


def create_qdrant_adapter(
    runtime: Any = None,
    *,
    settings: Optional[QdrantSettings] = None,
    client: Any = None,
) -> QdrantMemoryAdapter:
    """Build an adapter from explicit settings, a runtime's ``get_setting`` or the environment.

    Raises ``ConfigError`` before any client is created when a required
    setting is missing.
    """
    if settings is None:
        if runtime is not None:
            settings = QdrantSettings.from_getter(runtime.get_setting)
        else:
            settings = QdrantSettings.load()

    setup_logging(settings.log_level)
    logger = get_logger("QdrantAdapterFactory")
    logger.info("Initializing Qdrant adapter", extra={"settings": dict(settings.as_dict())})
    return QdrantMemoryAdapter.from_settings(settings, client=client)


QDRANT_PLUGIN = {
    "name": "qdrant",
    "description": "Qdrant database adapter plugin",
    "adapters": [create_qdrant_adapter],
}

__all__ = ["QDRANT_PLUGIN", "create_qdrant_adapter"]
