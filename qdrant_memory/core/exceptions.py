"""Custom exception hierarchy for the Qdrant memory adapter."""

from __future__ import annotations


class AdapterError(Exception):
    """Base class for project-specific exceptions."""


class ConfigError(AdapterError):
    """Raised when required settings are missing or cannot be parsed."""


class QueryValidationError(AdapterError):
    """Raised when a query is missing required parameters or carries a malformed embedding."""


class UnsupportedOperationError(AdapterError):
    """Raised by database operations this adapter intentionally does not implement."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Operation '{operation}' is not supported by the Qdrant adapter.")
        self.operation = operation
