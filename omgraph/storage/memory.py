"""In-memory content store for testing and development.

This module provides a dictionary-based implementation of both capability
interfaces. It keeps canonical JSON bytes keyed by their sha256 address, so
it behaves like a real content-addressed network:

- **Deterministic addresses**: storing identical content twice yields the
  same address and does not grow the store
- **Exact round trip**: fetched resources are parsed back from the stored
  bytes, never handed out by reference

**Not recommended for production** due to:
- No persistence (data is lost when the process exits)
- Memory constraints (all data must fit in RAM)
"""

import json
from typing import Any

from omgraph.canonical import canonical_json, content_address
from omgraph.config import DEFAULT_ADDRESS_PREFIX, OmgraphConfig
from omgschema import Alias, Document, Schema
from omgschema.storage import ResourceFetcherInterface, ResourceStoreInterface


class InMemoryContentStore(ResourceFetcherInterface, ResourceStoreInterface):
    """Content-addressed storage using a `dict[str, bytes]`.

    Thread safety: Not thread-safe. Safe for concurrent use from asyncio
    tasks on a single event loop.

    Example:
        ```python
        store = InMemoryContentStore()
        address = await store.store(Schema(name="post", elements={}))
        schema = await store.fetch(address)
        ```
    """

    def __init__(self, prefix: str = DEFAULT_ADDRESS_PREFIX) -> None:
        """Initialize an empty store.

        Args:
            prefix: Prepended to every issued address.
        """
        self.prefix = prefix
        self._blobs: dict[str, bytes] = {}
        self.write_count = 0
        self.written: list[str] = []

    @classmethod
    def from_config(cls, config: OmgraphConfig) -> "InMemoryContentStore":
        """Create a store issuing addresses with ``config.address_prefix``."""
        return cls(prefix=config.address_prefix)

    async def store(self, resource: Document | Schema | Alias) -> str:
        """Persist a resource under the hash of its canonical bytes.

        Args:
            resource: The document, schema or alias to store.

        Returns:
            The resource's content address.
        """
        data = canonical_json(resource)
        address = content_address(data, self.prefix)
        self._blobs[address] = data
        self.write_count += 1
        self.written.append(address)
        return address

    async def fetch(self, address: str) -> dict[str, Any]:
        """Return the wire-format mapping stored at ``address``.

        Raises:
            LookupError: If nothing is stored at the address.
        """
        try:
            data = self._blobs[address]
        except KeyError:
            raise LookupError(f"No resource stored at '{address}'") from None
        return json.loads(data)

    def put_raw(self, address: str, payload: dict[str, Any]) -> None:
        """Store an arbitrary mapping under a caller-chosen address.

        Used to seed fixtures with hand-written (possibly malformed) content.
        Does not count as a write.
        """
        self._blobs[address] = json.dumps(payload).encode("utf-8")

    def __contains__(self, address: object) -> bool:
        return address in self._blobs

    def __len__(self) -> int:
        return len(self._blobs)
