"""Static GraphQL types shared by every compiled surface."""

from typing import Any

from graphql import (
    GraphQLArgument,
    GraphQLBoolean,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLString,
    ValueNode,
    value_from_ast_untyped,
)


def _identity(value: Any) -> Any:
    return value


def _parse_json_literal(value_node: ValueNode, variables: dict[str, Any] | None = None) -> Any:
    return value_from_ast_untyped(value_node, variables)


JSONScalar = GraphQLScalarType(
    name="JSON",
    description="An arbitrary JSON value",
    serialize=_identity,
    parse_value=_identity,
    parse_literal=_parse_json_literal,
)

FileType = GraphQLObjectType(
    name="File",
    description="A URI to a file somewhere else",
    fields={
        "contentType": GraphQLField(GraphQLString, description="A mime type, like 'image/gif'"),
        "uri": GraphQLField(GraphQLString, description="A URI, like ipfs://mycid, or https://example.com/foo.gif"),
    },
)

FileInputType = GraphQLInputObjectType(
    name="FileInput",
    fields={
        "contentType": GraphQLInputField(GraphQLString),
        "uri": GraphQLInputField(GraphQLString),
    },
)


def _key_input(name: str, **extra: GraphQLInputField) -> GraphQLInputObjectType:
    return GraphQLInputObjectType(
        name=name,
        fields={
            "key": GraphQLInputField(GraphQLNonNull(GraphQLString)),
            "multiple": GraphQLInputField(GraphQLBoolean, default_value=False),
            **extra,
        },
    )


StringSchemaInput = _key_input("StringSchemaInput")
NumberSchemaInput = _key_input("NumberSchemaInput")
FileSchemaInput = _key_input("FileSchemaInput")
NodeSchemaInput = _key_input(
    "NodeSchemaInput",
    schemas=GraphQLInputField(GraphQLNonNull(GraphQLList(GraphQLNonNull(GraphQLString)))),
)

SchemaInputType = GraphQLInputObjectType(
    name="SchemaInput",
    description="Input for creating a schema",
    fields={
        "name": GraphQLInputField(GraphQLNonNull(GraphQLString)),
        "strings": GraphQLInputField(GraphQLList(GraphQLNonNull(StringSchemaInput)), default_value=[]),
        "numbers": GraphQLInputField(GraphQLList(GraphQLNonNull(NumberSchemaInput)), default_value=[]),
        "files": GraphQLInputField(GraphQLList(GraphQLNonNull(FileSchemaInput)), default_value=[]),
        "nodes": GraphQLInputField(GraphQLList(GraphQLNonNull(NodeSchemaInput)), default_value=[]),
    },
)

AliasInputType = GraphQLInputObjectType(
    name="AliasInput",
    description="Input for creating an alias",
    fields={
        "name": GraphQLInputField(GraphQLNonNull(GraphQLString)),
        "schemas": GraphQLInputField(GraphQLNonNull(GraphQLList(GraphQLNonNull(GraphQLString)))),
    },
)

CreateResponse = GraphQLObjectType(
    name="CreateResponse",
    fields={"key": GraphQLField(GraphQLString)},
)

KEY_ARGS = {"key": GraphQLArgument(GraphQLNonNull(GraphQLString))}
