"""Translate compiled node types into graphql-core object and input types.

Each CompiledNodeType becomes exactly one GraphQLObjectType (for queries) and
one GraphQLInputObjectType (for ``createDocument``), cached by type name on the
builder. Field maps are thunks, so cyclic type graphs are fine.
"""

from typing import Any, Callable

from graphql import (
    GraphQLError,
    GraphQLField,
    GraphQLFloat,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInputType,
    GraphQLList,
    GraphQLObjectType,
    GraphQLOutputType,
    GraphQLResolveInfo,
    GraphQLString,
    assert_name,
)

from omgraph.compiler import CompiledField, CompiledNodeType, reachable_types
from omgraph.errors import FieldNameError
from omgraph.graphql.types import FileInputType, FileType
from omgraph.operations import read_field
from omgschema import Document, ElementKind
from omgschema.storage import ResourceFetcherInterface

_SCALAR_OUTPUTS: dict[ElementKind, GraphQLOutputType] = {
    ElementKind.STRING: GraphQLString,
    ElementKind.NUMBER: GraphQLFloat,
    ElementKind.FILE: FileType,
}

_SCALAR_INPUTS: dict[ElementKind, GraphQLInputType] = {
    ElementKind.STRING: GraphQLString,
    ElementKind.NUMBER: GraphQLFloat,
    ElementKind.FILE: FileInputType,
}


def element_resolver(field: CompiledField, fetcher: ResourceFetcherInterface) -> Callable[..., Any]:
    """Build the resolver reading ``field`` out of a parent document."""

    async def resolve(source: Document, info: GraphQLResolveInfo) -> Any:
        return await read_field(source, field, fetcher)

    return resolve


def check_field_names(root: CompiledNodeType) -> None:
    """Reject element keys that graphql-core cannot use as field names.

    Such keys still validate and materialize outside GraphQL; only the
    surface refuses them.

    Raises:
        FieldNameError: For the first offending key.
    """
    for node_type in reachable_types(root):
        for key in node_type.fields:
            try:
                assert_name(key)
            except GraphQLError as e:
                raise FieldNameError(key, node_type.addresses, e.message) from e


class GraphQLTypeBuilder:
    """Per-surface cache of generated GraphQL types."""

    def __init__(self, fetcher: ResourceFetcherInterface):
        self.fetcher = fetcher
        self._objects: dict[str, GraphQLObjectType] = {}
        self._inputs: dict[str, GraphQLInputObjectType] = {}

    def object_type(self, node_type: CompiledNodeType) -> GraphQLObjectType:
        existing = self._objects.get(node_type.name)
        if existing is not None:
            return existing
        obj = GraphQLObjectType(
            name=node_type.name,
            fields=lambda: {key: self._output_field(f) for key, f in node_type.fields.items()},
        )
        self._objects[node_type.name] = obj
        return obj

    def input_type(self, node_type: CompiledNodeType, name: str | None = None) -> GraphQLInputObjectType:
        name = name or f"{node_type.name}CreateInput"
        existing = self._inputs.get(name)
        if existing is not None:
            return existing
        obj = GraphQLInputObjectType(
            name=name,
            fields=lambda: {key: self._input_field(f) for key, f in node_type.fields.items()},
        )
        self._inputs[name] = obj
        return obj

    def _output_field(self, field: CompiledField) -> GraphQLField:
        if field.kind == ElementKind.NODE:
            inner: GraphQLOutputType = self.object_type(field.target)
        else:
            inner = _SCALAR_OUTPUTS[field.kind]
        return GraphQLField(
            GraphQLList(inner) if field.multiple else inner,
            resolve=element_resolver(field, self.fetcher),
        )

    def _input_field(self, field: CompiledField) -> GraphQLInputField:
        # Inputs stay nullable so a missing key reaches the validator and is
        # reported as a cardinality error.
        if field.kind == ElementKind.NODE:
            inner: GraphQLInputType = self.input_type(field.target)
        else:
            inner = _SCALAR_INPUTS[field.kind]
        return GraphQLInputField(GraphQLList(inner) if field.multiple else inner)
