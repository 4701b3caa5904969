"""GraphQL query/mutation surface compiled from OpenMetaGraph schemas."""

from omgraph.graphql.builder import GraphQLTypeBuilder, check_field_names
from omgraph.graphql.schema import build_graphql_schema, execute_query

__all__ = [
    "GraphQLTypeBuilder",
    "build_graphql_schema",
    "check_field_names",
    "execute_query",
]
