"""Query and mutation operations over a content store.

These are the plain async building blocks behind the GraphQL surface:

- ``get_document``: fetch a document by address
- ``read_field``: read one compiled field out of a document, honoring
  cardinality and following node references
- ``create_schema`` / ``create_alias`` / ``create_document``: build a
  canonical resource and persist it

They can be used directly, without GraphQL.
"""

import asyncio
from typing import Any, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field

from omgraph.capabilities import fetch_document, store_resource
from omgraph.compiler import CompiledField
from omgraph.config import OmgraphConfig
from omgraph.errors import CardinalityError, ElementTypeError, SchemaConflictError
from omgraph.materialize import DocumentMaterializer
from omgraph.validation import Validator
from omgschema import (
    Alias,
    Document,
    ElementKind,
    FileDefinition,
    NodeDefinition,
    NumberDefinition,
    Schema,
    StringDefinition,
)
from omgschema.element import Element
from omgschema.storage import ResourceFetcherInterface, ResourceStoreInterface


class KeyInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1)
    multiple: bool = False


class NodeKeyInput(KeyInput):
    schemas: list[str] = Field(min_length=1)


class SchemaInput(BaseModel):
    """Per-kind key lists for ``createSchema``."""

    model_config = ConfigDict(frozen=True)

    name: str
    strings: list[KeyInput] = Field(default_factory=list)
    numbers: list[KeyInput] = Field(default_factory=list)
    files: list[KeyInput] = Field(default_factory=list)
    nodes: list[NodeKeyInput] = Field(default_factory=list)


class AliasInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    schemas: list[str] = Field(default_factory=list)


def build_schema(schema_input: SchemaInput, version: str = "0.1.0") -> Schema:
    """Build a canonical schema from per-kind key lists.

    Raises:
        SchemaConflictError: If a key appears more than once in the input.
    """
    elements: dict[str, Any] = {}
    sources: dict[str, str] = {}

    def add(kind: str, key: str, definition: Any) -> None:
        if key in elements:
            raise SchemaConflictError(key, f"{sources[key]} input", f"{kind} input")
        elements[key] = definition
        sources[key] = kind

    for item in schema_input.strings:
        add("strings", item.key, StringDefinition(multiple=item.multiple))
    for item in schema_input.numbers:
        add("numbers", item.key, NumberDefinition(multiple=item.multiple))
    for item in schema_input.files:
        add("files", item.key, FileDefinition(multiple=item.multiple))
    for item in schema_input.nodes:
        add("nodes", item.key, NodeDefinition(multiple=item.multiple, schemas=list(item.schemas)))

    return Schema(version=version, name=schema_input.name, elements=dict(sorted(elements.items())))


async def get_document(fetcher: ResourceFetcherInterface, address: str) -> Document:
    """Fetch the document stored at ``address``."""
    return await fetch_document(fetcher, address)


async def read_field(document: Document, field: CompiledField, fetcher: ResourceFetcherInterface) -> Any:
    """Read one field of ``document``.

    Non-multiple fields must have exactly one element; multiple fields return
    a list in document order. Node elements are fetched (concurrently for
    multiple fields) and returned as documents.

    Raises:
        CardinalityError: A non-multiple key occurs zero or several times.
        ElementTypeError: An element's kind does not match the field.
    """
    data = document.elements_for(field.key)
    if not field.multiple and len(data) != 1:
        raise CardinalityError(field.key, len(data))
    for element in data:
        if element.kind != field.kind:
            raise ElementTypeError(field.key, f"a {field.kind.value} element", f"a {element.kind} element")

    if field.kind == ElementKind.NODE:
        documents = await asyncio.gather(*(fetch_document(fetcher, element.uri) for element in data))
        return list(documents) if field.multiple else documents[0]

    values = [_element_value(element) for element in data]
    return values if field.multiple else values[0]


def _element_value(element: Element) -> Any:
    if element.kind == "file":
        return {"contentType": element.content_type, "uri": element.uri}
    return element.value


async def create_schema(
    store: ResourceStoreInterface,
    schema_input: SchemaInput | Mapping[str, Any],
    config: OmgraphConfig | None = None,
) -> str:
    """Build and persist a schema, returning its address."""
    config = config or OmgraphConfig()
    schema_input = SchemaInput.model_validate(schema_input)
    return await store_resource(store, build_schema(schema_input, config.version))


async def create_alias(
    store: ResourceStoreInterface,
    alias_input: AliasInput | Mapping[str, Any],
    config: OmgraphConfig | None = None,
) -> str:
    """Persist an alias as given. Its targets are not resolved here."""
    config = config or OmgraphConfig()
    alias_input = AliasInput.model_validate(alias_input)
    alias = Alias(version=config.version, name=alias_input.name, schemas=list(alias_input.schemas))
    return await store_resource(store, alias)


async def create_document(
    fetcher: ResourceFetcherInterface,
    store: ResourceStoreInterface,
    payload: Mapping[str, Any],
    addresses: Sequence[str],
    config: OmgraphConfig | None = None,
    validator: Validator | None = None,
) -> str:
    """Materialize ``payload`` against ``addresses`` and persist the root."""
    materializer = DocumentMaterializer(fetcher, store, config)
    document = await materializer.materialize(payload, addresses, validator=validator)
    return await store_resource(store, document)
