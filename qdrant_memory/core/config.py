"""Configuration loader for the Qdrant memory adapter."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, MutableMapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

URL_KEY = "QDRANT_URL"
API_KEY_KEY = "QDRANT_KEY"
PORT_KEY = "QDRANT_PORT"
VECTOR_SIZE_KEY = "QDRANT_VECTOR_SIZE"
COLLECTION_KEY = "QDRANT_COLLECTION"

REQUIRED_KEYS = (URL_KEY, API_KEY_KEY, PORT_KEY, VECTOR_SIZE_KEY)
DEFAULT_COLLECTION = "collection"

SettingGetter = Callable[[str], Any]


def _coerce_optional(value: Any) -> Optional[str]:
    """Return stripped value or ``None`` when the input is empty."""
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped if stripped else None


def _mask(value: Optional[str]) -> str:
    if not value:
        return "<empty>"
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}***{value[-4:]}"


def parse_int_setting(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}.") from exc


def ensure_connection_settings(
    url: Any,
    api_key: Any,
    port: Any,
    vector_size: Any,
) -> None:
    """Raise ``ConfigError`` naming every required connection setting that is falsy."""
    provided = {
        URL_KEY: url,
        API_KEY_KEY: api_key,
        PORT_KEY: port,
        VECTOR_SIZE_KEY: vector_size,
    }
    missing = [name for name, value in provided.items() if not value]
    if missing:
        raise ConfigError(f"{', '.join(missing)} must be set to initialise the Qdrant adapter.")


@dataclass(frozen=True)
class QdrantSettings:
    """Immutable connection settings for the Qdrant memory adapter."""

    url: str
    api_key: str = field(repr=False)
    port: int
    vector_size: int
    collection_name: str = DEFAULT_COLLECTION
    log_level: str = "INFO"
    env_path: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_getter(cls, get_setting: SettingGetter, *, env_path: Optional[str] = None) -> "QdrantSettings":
        """Build settings from a ``get_setting(name)`` callable such as an agent runtime."""
        url = _coerce_optional(get_setting(URL_KEY))
        api_key = _coerce_optional(get_setting(API_KEY_KEY))
        port = _coerce_optional(get_setting(PORT_KEY))
        vector_size = _coerce_optional(get_setting(VECTOR_SIZE_KEY))
        ensure_connection_settings(url, api_key, port, vector_size)

        parsed_port = parse_int_setting(PORT_KEY, port)
        parsed_size = parse_int_setting(VECTOR_SIZE_KEY, vector_size)
        if parsed_size <= 0:
            raise ConfigError(f"{VECTOR_SIZE_KEY} must be positive, got {parsed_size}.")

        collection_name = _coerce_optional(get_setting(COLLECTION_KEY)) or DEFAULT_COLLECTION
        log_level = (_coerce_optional(get_setting("LOG_LEVEL")) or "INFO").upper()

        return cls(
            url=url,  # type: ignore[arg-type]
            api_key=api_key,  # type: ignore[arg-type]
            port=parsed_port,
            vector_size=parsed_size,
            collection_name=collection_name,
            log_level=log_level,
            env_path=env_path,
        )

    @classmethod
    def load(
        cls,
        env_file: Optional[Path | str] = None,
        *,
        override_env: Optional[MutableMapping[str, str]] = None,
    ) -> "QdrantSettings":
        """Load settings from ``.env`` and the current environment."""
        env_path = Path(env_file) if env_file is not None else Path.cwd() / ".env"

        logger = logging.getLogger(__name__)
        env_path_str: Optional[str] = None

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, override=True)
            logger.debug("Loaded .env file", extra={"env_path": str(env_path)})
            env_path_str = str(env_path)
        else:
            load_dotenv(override=False)
            logger.debug(".env file not found; using process environment", extra={"env_path": str(env_path)})

        if override_env:
            for key, value in override_env.items():
                os.environ[key] = value

        settings = cls.from_getter(os.getenv, env_path=env_path_str)
        logger.debug("Qdrant settings resolved", extra=dict(settings.as_dict()))
        return settings

    def as_dict(self) -> Mapping[str, str]:
        """Expose settings for debugging with the API key masked."""
        return {
            "url": self.url,
            "api_key": _mask(self.api_key),
            "port": str(self.port),
            "vector_size": str(self.vector_size),
            "collection_name": self.collection_name,
            "log_level": self.log_level,
        }
