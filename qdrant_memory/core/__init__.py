"""Core utilities for the Qdrant memory adapter."""

from .config import QdrantSettings  # noqa: F401
from .exceptions import (  # noqa: F401
    AdapterError,
    ConfigError,
    QueryValidationError,
    UnsupportedOperationError,
)
from .logger import get_logger, setup_logging  # noqa: F401

__all__ = [
    "AdapterError",
    "ConfigError",
    "QdrantSettings",
    "QueryValidationError",
    "UnsupportedOperationError",
    "get_logger",
    "setup_logging",
]
