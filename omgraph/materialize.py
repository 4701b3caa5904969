"""Convert nested input payloads into canonical flat documents.

Payload keys holding nested objects (``node`` keys) are never inlined. Each
nested object is materialized on its own against the node key's declared
schemas, persisted through the store capability, and referenced from the
parent by a ``node`` element carrying the child's address. Children are
therefore stored before their parents.

The root document is returned to the caller unstored, so the caller persists
it exactly once.

Validation of the complete payload tree happens before anything is stored:
an invalid payload performs zero store writes.
"""

import asyncio
import logging
from typing import Any, Mapping, Sequence

from omgraph.capabilities import store_resource
from omgraph.compiler import CompiledField, CompiledNodeType, TypeCompiler
from omgraph.config import OmgraphConfig
from omgraph.validation import Validator
from omgschema import Document, ElementKind, FileElement, NodeElement, NumberElement, StringElement
from omgschema.element import Element
from omgschema.storage import ResourceFetcherInterface, ResourceStoreInterface

logger = logging.getLogger(__name__)


class DocumentMaterializer:
    """Build documents from payloads, persisting nested child documents.

    Example:
        ```python
        materializer = DocumentMaterializer(store, store)
        document = await materializer.materialize({"title": "hello"}, [schema_address])
        address = await store.store(document)
        ```
    """

    def __init__(
        self,
        fetcher: ResourceFetcherInterface,
        store: ResourceStoreInterface,
        config: OmgraphConfig | None = None,
    ):
        self.fetcher = fetcher
        self.store = store
        self.config = config or OmgraphConfig()

    async def materialize(
        self,
        payload: Mapping[str, Any],
        addresses: Sequence[str],
        validator: Validator | None = None,
    ) -> Document:
        """Validate ``payload`` and turn it into a document for ``addresses``.

        Args:
            payload: Nested JSON-like value keyed by element key.
            addresses: Schema or alias addresses the document is built against.
            validator: A validator already compiled for ``addresses``. Built on
                demand when omitted.

        Raises:
            DocumentValidationError: If the payload does not match the schemas.
        """
        if validator is None:
            root = await TypeCompiler(self.fetcher, self.config).compile(addresses)
            validator = Validator.from_compiled(root)
        data = validator.validate_payload(payload)
        return await self._build(validator.root, data, addresses)

    async def _build(self, node_type: CompiledNodeType, data: Mapping[str, Any], schemas: Sequence[str]) -> Document:
        elements: list[Element] = []
        for key, field in node_type.fields.items():
            values = data[key] if field.multiple else [data[key]]
            if field.kind == ElementKind.NODE:
                addresses = await asyncio.gather(*(self._persist_child(field, value) for value in values))
                elements.extend(NodeElement(key=key, uri=address) for address in addresses)
            else:
                elements.extend(_scalar_element(key, field, value) for value in values)
        return Document(version=self.config.version, schemas=list(schemas), elements=elements)

    async def _persist_child(self, field: CompiledField, value: Mapping[str, Any]) -> str:
        child = await self._build(field.target, value, field.schemas)
        address = await store_resource(self.store, child)
        logger.debug("persisted child of '%s' at %s", field.key, address)
        return address


def _scalar_element(key: str, field: CompiledField, value: Any) -> Element:
    if field.kind == ElementKind.STRING:
        return StringElement(key=key, value=value)
    if field.kind == ElementKind.NUMBER:
        return NumberElement(key=key, value=value)
    return FileElement(key=key, content_type=value["contentType"], uri=value["uri"])


async def materialize(
    fetcher: ResourceFetcherInterface,
    store: ResourceStoreInterface,
    payload: Mapping[str, Any],
    addresses: Sequence[str],
    config: OmgraphConfig | None = None,
) -> Document:
    """Materialize ``payload`` against ``addresses`` with a fresh materializer."""
    return await DocumentMaterializer(fetcher, store, config).materialize(payload, addresses)
