"""Assemble the query/mutation surface for a set of schema addresses.

The surface is built per request, from whatever schema (or alias) addresses
the caller asks to read documents through:

    query {
      get(key: "omg://...") { title photos { uri contentType } }
    }

    mutation {
      createSchema(schema: {...}) { key }
      createAlias(alias: {...}) { key }
      createDocument(doc: {...}) { key }
    }

Without any schema addresses, ``get`` returns the raw document as JSON and
``createDocument`` is not offered.
"""

import logging
from typing import Any, Sequence

from graphql import (
    ExecutionResult,
    GraphQLArgument,
    GraphQLError,
    GraphQLField,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLResolveInfo,
    GraphQLSchema,
    graphql,
)

from omgraph.canonical import canonical_dict
from omgraph.capabilities import fetch_document
from omgraph.compiler import TypeCompiler
from omgraph.config import OmgraphConfig
from omgraph.errors import OmgError
from omgraph.graphql.builder import GraphQLTypeBuilder, check_field_names
from omgraph.graphql.types import KEY_ARGS, AliasInputType, CreateResponse, JSONScalar, SchemaInputType
from omgraph.operations import create_alias, create_document, create_schema
from omgraph.validation import Validator
from omgschema import Document
from omgschema.storage import ResourceFetcherInterface, ResourceStoreInterface

logger = logging.getLogger(__name__)


async def build_graphql_schema(
    fetcher: ResourceFetcherInterface,
    store: ResourceStoreInterface,
    addresses: Sequence[str],
    config: OmgraphConfig | None = None,
) -> GraphQLSchema:
    """Compile ``addresses`` and build the GraphQL schema serving them.

    Raises:
        OmgError: If the addresses cannot be resolved or compiled.
    """
    config = config or OmgraphConfig()
    addresses = list(addresses)
    builder = GraphQLTypeBuilder(fetcher)

    async def resolve_create_schema(_: Any, info: GraphQLResolveInfo, schema: dict[str, Any]) -> dict[str, str]:
        return {"key": await create_schema(store, schema, config)}

    async def resolve_create_alias(_: Any, info: GraphQLResolveInfo, alias: dict[str, Any]) -> dict[str, str]:
        return {"key": await create_alias(store, alias, config)}

    mutation_fields: dict[str, GraphQLField] = {
        "createSchema": GraphQLField(
            CreateResponse,
            args={"schema": GraphQLArgument(GraphQLNonNull(SchemaInputType))},
            resolve=resolve_create_schema,
        ),
        "createAlias": GraphQLField(
            CreateResponse,
            args={"alias": GraphQLArgument(GraphQLNonNull(AliasInputType))},
            resolve=resolve_create_alias,
        ),
    }

    if not addresses:

        async def resolve_raw(_: Any, info: GraphQLResolveInfo, key: str) -> dict[str, Any]:
            return canonical_dict(await fetch_document(fetcher, key))

        query = GraphQLObjectType(
            name="Query",
            fields={"get": GraphQLField(JSONScalar, args=KEY_ARGS, resolve=resolve_raw)},
        )
        return GraphQLSchema(query=query, mutation=GraphQLObjectType("Mutation", mutation_fields))

    root = await TypeCompiler(fetcher, config).compile(addresses)
    check_field_names(root)
    validator = Validator.from_compiled(root)

    async def resolve_get(_: Any, info: GraphQLResolveInfo, key: str) -> Document:
        return await fetch_document(fetcher, key)

    async def resolve_create_document(_: Any, info: GraphQLResolveInfo, doc: dict[str, Any]) -> dict[str, str]:
        return {"key": await create_document(fetcher, store, doc, addresses, config, validator=validator)}

    mutation_fields["createDocument"] = GraphQLField(
        CreateResponse,
        args={"doc": GraphQLArgument(GraphQLNonNull(builder.input_type(root, "CreateDocumentInput")))},
        resolve=resolve_create_document,
    )
    query = GraphQLObjectType(
        name="Query",
        fields={"get": GraphQLField(builder.object_type(root), args=KEY_ARGS, resolve=resolve_get)},
    )
    return GraphQLSchema(query=query, mutation=GraphQLObjectType("Mutation", mutation_fields))


async def execute_query(
    fetcher: ResourceFetcherInterface,
    store: ResourceStoreInterface,
    addresses: Sequence[str],
    source: str,
    variable_values: dict[str, Any] | None = None,
    operation_name: str | None = None,
    config: OmgraphConfig | None = None,
) -> ExecutionResult:
    """Build the surface for ``addresses`` and execute one request against it.

    Failures while building the surface are returned as an ExecutionResult
    carrying the error, so nothing escapes the request that caused it.
    """
    config = config or OmgraphConfig()
    try:
        schema = await build_graphql_schema(fetcher, store, addresses, config)
    except (OmgError, GraphQLError) as e:
        logger.warning("could not build surface for %s: %s", list(addresses), e)
        error = e if isinstance(e, GraphQLError) else GraphQLError(str(e), original_error=e)
        return ExecutionResult(data=None, errors=[error])
    result = await graphql(
        schema,
        source,
        variable_values=variable_values,
        operation_name=operation_name,
    )
    if result.errors:
        logger.debug("request failed: %s", [error.formatted for error in result.errors])
    return result
