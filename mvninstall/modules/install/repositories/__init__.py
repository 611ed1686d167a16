"""Repository store exports."""

from .base import RepositoryStore
from .local import LocalRepositoryStore
from .memory import InMemoryRepositoryStore

__all__ = ["RepositoryStore", "LocalRepositoryStore", "InMemoryRepositoryStore"]
