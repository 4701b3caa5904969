"""Capability interfaces for the content-addressed store.

The core never talks to a content network directly. Callers inject two
capabilities instead:

- **ResourceFetcherInterface**: resolve a content address to the stored
  document, schema or alias
- **ResourceStoreInterface**: persist a resource and return its address

Keeping these as explicit constructor/parameter arguments means the whole
core can run against an in-memory fake in tests, and against IPFS (or any
other content-addressed network) in production.

Both interfaces are async-first; fetches and stores may suspend for
arbitrary latency. Timeouts and retries are the implementation's concern.
"""

from abc import ABC, abstractmethod
from typing import Any

from omgschema.document import Document
from omgschema.schema import Alias, Schema


class ResourceFetcherInterface(ABC):
    """Abstract interface for reading resources by content address."""

    @abstractmethod
    async def fetch(self, address: str) -> Document | Schema | Alias | dict[str, Any]:
        """Return the resource stored at ``address``.

        Implementations may return either a parsed resource model or the raw
        wire-format mapping; callers in this package parse raw mappings
        themselves.

        Raises:
            Exception: Any failure to resolve the address. Implementations
                must fail rather than return an empty or malformed value.
        """


class ResourceStoreInterface(ABC):
    """Abstract interface for persisting resources."""

    @abstractmethod
    async def store(self, resource: Document | Schema | Alias) -> str:
        """Persist ``resource`` and return its content address.

        Storing two resources with byte-identical canonical serializations
        must return the same address.
        """
