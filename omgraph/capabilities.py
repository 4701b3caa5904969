"""Thin wrappers around the injected fetch/store capabilities.

Capability failures are passed through, not reinterpreted: they are wrapped
in :class:`FetchError` / :class:`StoreError` with the offending address and
chained to the original exception.
"""

import logging

from pydantic import ValidationError

from omgraph.errors import FetchError, OmgError, ResourceFormatError, StoreError, UnexpectedResourceError
from omgschema import Alias, Document, Schema, parse_resource
from omgschema.storage import ResourceFetcherInterface, ResourceStoreInterface

logger = logging.getLogger(__name__)


async def fetch_resource(fetcher: ResourceFetcherInterface, address: str) -> Document | Schema | Alias:
    """Fetch and parse the resource at ``address``."""
    try:
        raw = await fetcher.fetch(address)
    except OmgError:
        raise
    except Exception as e:
        raise FetchError(address, e) from e
    if raw is None:
        raise FetchError(address, "fetcher returned nothing")
    try:
        return parse_resource(raw)
    except ValidationError as e:
        raise ResourceFormatError(address, e) from e


async def fetch_document(fetcher: ResourceFetcherInterface, address: str) -> Document:
    """Fetch the resource at ``address`` and require it to be a document."""
    resource = await fetch_resource(fetcher, address)
    if not isinstance(resource, Document):
        raise UnexpectedResourceError(address, expected="document", actual=resource.kind)
    return resource


async def store_resource(store: ResourceStoreInterface, resource: Document | Schema | Alias) -> str:
    """Persist ``resource`` and return its address."""
    try:
        address = await store.store(resource)
    except OmgError:
        raise
    except Exception as e:
        raise StoreError(resource.kind, e) from e
    logger.debug("stored %s at %s", resource.kind, address)
    return address
