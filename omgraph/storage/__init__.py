"""Storage implementations of the fetch/store capabilities."""

from omgraph.storage.memory import InMemoryContentStore

__all__ = ["InMemoryContentStore"]
