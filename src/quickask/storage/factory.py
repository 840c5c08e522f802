"""Factory for creating local storage backends."""

from typing import Any

from .base import LocalStorage


def create_local_storage(
    backend: str = "sqlite",
    **kwargs: Any
) -> LocalStorage:
    """Create a local storage backend.

    Args:
        backend: Backend type ("memory" or "sqlite")
        **kwargs: Backend-specific configuration
            For sqlite:
                - path: str | Path (default: ./local_storage.db)

    Returns:
        LocalStorage instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryLocalStorage
        return InMemoryLocalStorage(**kwargs)

    elif backend == "sqlite":
        from .sqlite import SQLiteLocalStorage
        return SQLiteLocalStorage(**kwargs)

    raise ValueError(
        f"Unsupported storage backend: {backend}. "
        f"Supported backends: memory, sqlite"
    )
