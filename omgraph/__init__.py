"""
OpenMetaGraph - schema-driven query surface over content-addressed documents.

Documents, schemas and aliases live in a content-addressable store. Given a
set of schema (or alias) addresses, this package:

- resolves aliases and merges the schemas they denote (``SchemaResolver``)
- compiles the merged shape into typed fields (``TypeCompiler``)
- validates payloads and documents against it (``build_validator``)
- turns nested payloads into flat documents, storing children (``DocumentMaterializer``)
- serves it all as a GraphQL schema (``build_graphql_schema``)

The GraphQL layer is imported lazily so the core can be used without
loading graphql-core:

    # This does NOT import graphql:
    from omgraph import TypeCompiler

    # This DOES import graphql (when the symbol is accessed):
    from omgraph import build_graphql_schema
"""

from typing import TYPE_CHECKING

from omgraph.compiler import CompiledField, CompiledNodeType, TypeCompiler, compile_fields, reachable_types
from omgraph.config import OmgraphConfig, load_config
from omgraph.errors import (
    AliasCycleError,
    CardinalityError,
    CompilationError,
    DocumentValidationError,
    ElementKindError,
    ElementTypeError,
    FetchError,
    FieldNameError,
    OmgError,
    ResolutionError,
    ResourceFormatError,
    SchemaConflictError,
    StoreError,
    UnexpectedResourceError,
    UnknownKeyError,
)
from omgraph.materialize import DocumentMaterializer, materialize
from omgraph.navigate import DocumentNode, ElementView, open_document
from omgraph.operations import (
    AliasInput,
    SchemaInput,
    build_schema,
    create_alias,
    create_document,
    create_schema,
    get_document,
    read_field,
)
from omgraph.resolver import ResolvedSchema, SchemaResolver
from omgraph.storage import InMemoryContentStore
from omgraph.validation import Validator, build_validator, validate

if TYPE_CHECKING:
    from omgraph.graphql import build_graphql_schema, execute_query

__all__ = [
    "AliasCycleError",
    "AliasInput",
    "CardinalityError",
    "CompilationError",
    "CompiledField",
    "CompiledNodeType",
    "DocumentMaterializer",
    "DocumentNode",
    "DocumentValidationError",
    "ElementKindError",
    "ElementTypeError",
    "ElementView",
    "FetchError",
    "FieldNameError",
    "InMemoryContentStore",
    "OmgError",
    "OmgraphConfig",
    "ResolutionError",
    "ResolvedSchema",
    "ResourceFormatError",
    "SchemaConflictError",
    "SchemaInput",
    "SchemaResolver",
    "StoreError",
    "TypeCompiler",
    "UnexpectedResourceError",
    "UnknownKeyError",
    "Validator",
    "build_graphql_schema",
    "build_schema",
    "build_validator",
    "compile_fields",
    "create_alias",
    "create_document",
    "create_schema",
    "execute_query",
    "get_document",
    "load_config",
    "materialize",
    "open_document",
    "reachable_types",
    "read_field",
    "validate",
]

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy import for the GraphQL layer."""
    if name in ("build_graphql_schema", "execute_query"):
        from omgraph.graphql import build_graphql_schema, execute_query

        return {"build_graphql_schema": build_graphql_schema, "execute_query": execute_query}[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
