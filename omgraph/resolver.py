"""Expand schema and alias addresses into a flat set of concrete schemas.

Aliases may point at other aliases, so expansion is recursive. Each branch
carries the chain of alias addresses it is expanding; meeting an address
already on the chain is a cycle. Two aliases that reach the same schema
(a diamond) are not a cycle, and the schema appears once in the result.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Sequence

from omgraph.capabilities import fetch_resource
from omgraph.errors import AliasCycleError, UnexpectedResourceError
from omgschema import Alias, Schema
from omgschema.storage import ResourceFetcherInterface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedSchema:
    """A concrete schema together with the address it was fetched from."""

    address: str
    schema: Schema


class SchemaResolver:
    """Resolve schema/alias addresses through a fetch capability.

    Sibling addresses are fetched concurrently. The first failure aborts the
    whole resolution; partial results are discarded.
    """

    def __init__(self, fetcher: ResourceFetcherInterface):
        self.fetcher = fetcher

    async def resolve_all(self, addresses: Sequence[str]) -> list[ResolvedSchema]:
        """Return the concrete schemas denoted by ``addresses``.

        The result is a set in spirit: it contains each schema address once,
        in first-seen order.
        """
        resolved = await self._resolve(addresses, ())
        unique: dict[str, ResolvedSchema] = {}
        for item in resolved:
            unique.setdefault(item.address, item)
        logger.debug("resolved %s to %s", list(addresses), list(unique))
        return list(unique.values())

    async def _resolve(self, addresses: Sequence[str], chain: tuple[str, ...]) -> list[ResolvedSchema]:
        groups = await asyncio.gather(*(self._resolve_one(address, chain) for address in addresses))
        return [item for group in groups for item in group]

    async def _resolve_one(self, address: str, chain: tuple[str, ...]) -> list[ResolvedSchema]:
        if address in chain:
            raise AliasCycleError(chain + (address,))
        resource = await fetch_resource(self.fetcher, address)
        if isinstance(resource, Schema):
            return [ResolvedSchema(address, resource)]
        if isinstance(resource, Alias):
            return await self._resolve(resource.schemas, chain + (address,))
        raise UnexpectedResourceError(address, expected="schema or alias", actual=resource.kind)
