"""Test fixtures and helpers.

This module provides:
- An in-memory content store fixture (acts as both fetch and store capability)
- Helpers that persist schemas and aliases from compact element shapes
- A fetcher that fails for chosen addresses, for error propagation tests
- A store whose concurrent calls complete in reverse order

Element shapes are written as ``{"title": "string", "tags": "string*",
"inner": ("node", [address])}``: a trailing ``*`` marks the key multiple.
"""

import asyncio
from typing import Any

import pytest

from omgraph.storage.memory import InMemoryContentStore
from omgschema import Alias, Schema
from omgschema.storage import ResourceFetcherInterface, ResourceStoreInterface


def definitions(shape: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Expand a compact element shape into wire-format element definitions."""
    out: dict[str, dict[str, Any]] = {}
    for key, value in shape.items():
        schemas = None
        if isinstance(value, tuple):
            value, schemas = value
        multiple = value.endswith("*")
        kind = value.rstrip("*")
        definition: dict[str, Any] = {"kind": kind, "multiple": multiple}
        if schemas is not None:
            definition["schemas"] = list(schemas)
        out[key] = definition
    return out


async def put_schema(store: InMemoryContentStore, name: str, shape: dict[str, Any]) -> str:
    """Persist a schema built from a compact shape and return its address."""
    schema = Schema.model_validate({"kind": "schema", "name": name, "elements": definitions(shape)})
    return await store.store(schema)


async def put_alias(store: InMemoryContentStore, name: str, schemas: list[str]) -> str:
    """Persist an alias and return its address."""
    return await store.store(Alias(name=name, schemas=schemas))


class FailingFetcher(ResourceFetcherInterface):
    """Delegates to a store but raises for a fixed set of addresses."""

    def __init__(self, inner: InMemoryContentStore, failing: set[str]):
        self.inner = inner
        self.failing = failing
        self.calls: list[str] = []

    async def fetch(self, address: str):
        self.calls.append(address)
        if address in self.failing:
            raise TimeoutError(f"gateway timed out for {address}")
        return await self.inner.fetch(address)


@pytest.fixture
def store() -> InMemoryContentStore:
    """Create an empty in-memory content store."""
    return InMemoryContentStore()


class ReversingStore(ResourceFetcherInterface, ResourceStoreInterface):
    """Delegates to a store, delaying each call less than the one before.

    Calls issued together therefore complete in reverse order. ``completed``
    records fetched and stored addresses in completion order.
    """

    def __init__(self, inner: InMemoryContentStore, step: float = 0.002, width: int = 50):
        self.inner = inner
        self.step = step
        self.width = width
        self.calls = 0
        self.completed: list[str] = []

    async def _pause(self) -> None:
        delay = max(self.width - self.calls, 0) * self.step
        self.calls += 1
        await asyncio.sleep(delay)

    async def fetch(self, address: str):
        await self._pause()
        self.completed.append(address)
        return await self.inner.fetch(address)

    async def store(self, resource):
        await self._pause()
        address = await self.inner.store(resource)
        self.completed.append(address)
        return address
