"""Local storage module for quickask.

Provides durable key/value storage for client-side state.
"""

from .base import LocalStorage
from .factory import create_local_storage
from .in_memory import InMemoryLocalStorage

__all__ = [
    "InMemoryLocalStorage",
    "LocalStorage",
    "create_local_storage",
]
