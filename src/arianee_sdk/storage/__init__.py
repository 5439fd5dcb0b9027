"""
Storage backends for the Arianee SDK.

Backs the access-token cache and the fetch response cache.

Configuration via environment (read by `Config.from_env`):
    ARIANEE_STORAGE_BACKEND=memory  # or 'redis'
    ARIANEE_REDIS_URL=redis://localhost:6379/0

Example:
    >>> from arianee_sdk.storage import get_storage, storage_from_config
    >>> storage = get_storage("memory")
    >>> storage = storage_from_config(Config.from_env())
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from arianee_sdk.storage.base import (
    StorageBackend,
    get_storage_backend,
    list_storage_backends,
    register_storage_backend,
)
from arianee_sdk.storage.memory import InMemoryStorage
from arianee_sdk.storage.redis import RedisStorage

if TYPE_CHECKING:
    from arianee_sdk.core.config import Config


def get_storage(backend_name: str | None = None, **options: Any) -> StorageBackend:
    """
    Build a storage backend from environment or by name.

    Args:
        backend_name: Backend name, or None to read from ARIANEE_STORAGE_BACKEND env
        **options: Keyword arguments for the backend constructor

    Raises:
        ValueError: If backend name is unknown
    """
    if backend_name is None:
        backend_name = os.environ.get("ARIANEE_STORAGE_BACKEND", "memory")

    backend_class = get_storage_backend(backend_name)
    if backend_class is None:
        available = list_storage_backends()
        raise ValueError(
            f"Unknown storage backend: '{backend_name}'. Available: {', '.join(available)}"
        )

    return backend_class(**options)


def storage_from_config(config: Config) -> StorageBackend:
    """Backend named by `config.storage_backend`."""
    if config.storage_backend == "redis":
        return get_storage("redis", redis_url=config.redis_url)
    return get_storage(config.storage_backend)


__all__ = [
    "StorageBackend",
    "InMemoryStorage",
    "RedisStorage",
    "get_storage",
    "get_storage_backend",
    "list_storage_backends",
    "register_storage_backend",
    "storage_from_config",
]
