"""Compile resolved schemas into an explicit typed field surface.

The compiler walks schema data once per compilation and produces plain data:

- **CompiledNodeType**: a named object type with a field map. The root of a
  compilation and every ``node`` element definition compile to one.
- **CompiledField**: one key with its element kind, multiplicity and, for
  node keys, the nested CompiledNodeType.

Node types are identified by the sorted set of concrete schema addresses they
were merged from (after alias expansion). The identity is computed from the
set, never from fetch order, so two node definitions naming the same schemas
in a different order, or through an alias, compile to the same type object.
A cache local to each TypeCompiler maps identity to type; the type is
registered before its fields are compiled, which lets self-referencing
schemas compile to a finite cyclic graph.

The GraphQL layer and the validator both consume this structure.
"""

import hashlib
import logging
import re
from dataclasses import dataclass, field
from typing import Sequence

from omgraph.config import OmgraphConfig
from omgraph.errors import CompilationError, SchemaConflictError
from omgraph.resolver import ResolvedSchema, SchemaResolver
from omgschema import ElementDefinition, ElementKind, NodeDefinition, definitions_equivalent
from omgschema.storage import ResourceFetcherInterface

logger = logging.getLogger(__name__)

_NAME_INVALID = re.compile(r"[^0-9A-Za-z]+")


@dataclass(eq=False)
class CompiledNodeType:
    """An object type compiled from a merged schema set."""

    name: str
    identity: str
    addresses: tuple[str, ...]
    fields: dict[str, "CompiledField"] = field(default_factory=dict)


@dataclass(eq=False)
class CompiledField:
    """One key of a compiled type.

    ``schemas`` is the address list the node definition declared (possibly
    aliases); ``node`` is the type it compiled to. Both are empty for
    non-node kinds.
    """

    key: str
    kind: ElementKind
    multiple: bool
    schemas: tuple[str, ...] = ()
    node: CompiledNodeType | None = None

    @property
    def target(self) -> CompiledNodeType:
        """The nested type of a node field."""
        if self.node is None:
            raise CompilationError(f"Field '{self.key}' is a {self.kind.value} field, not a compiled node field")
        return self.node


def type_identity(addresses: Sequence[str]) -> str:
    """Hash a schema address set, ignoring order and duplicates."""
    joined = "\n".join(sorted(set(addresses)))
    return hashlib.sha256(joined.encode("utf-8")).hexdigest()


def _capitalize(name: str) -> str:
    parts = [p for p in _NAME_INVALID.split(name) if p]
    return "".join(p[0].upper() + p[1:] for p in parts)


def create_type_name(schemas: Sequence[ResolvedSchema], identity: str, hash_length: int = 8) -> str:
    """Build a GraphQL-safe, stable type name for a schema set.

    Schema names are joined in address order so the name does not depend on
    the order the schemas were requested in. The identity suffix keeps names
    unique when two different sets share schema names.
    """
    ordered = sorted({s.address: s for s in schemas}.values(), key=lambda s: s.address)
    readable = "".join(_capitalize(s.schema.name) for s in ordered)
    return f"Node{readable}_{identity[:hash_length]}"


def reachable_types(root: CompiledNodeType) -> list[CompiledNodeType]:
    """Every node type reachable from ``root``, each once, root first."""
    seen: dict[str, CompiledNodeType] = {}
    stack = [root]
    while stack:
        node_type = stack.pop()
        if node_type.identity in seen:
            continue
        seen[node_type.identity] = node_type
        stack.extend(f.node for f in node_type.fields.values() if f.node is not None)
    return list(seen.values())


class TypeCompiler:
    """Turn schema address sets into CompiledNodeType graphs.

    One instance is one compilation pass: its cache must not be shared
    between unrelated surfaces.

    Example:
        ```python
        compiler = TypeCompiler(store)
        root = await compiler.compile(["omg://abc..."])
        root.fields["title"].kind  # ElementKind.STRING
        ```
    """

    def __init__(self, fetcher: ResourceFetcherInterface, config: OmgraphConfig | None = None):
        self.config = config or OmgraphConfig()
        self.resolver = SchemaResolver(fetcher)
        self._types: dict[str, CompiledNodeType] = {}

    @property
    def types(self) -> list[CompiledNodeType]:
        """Every node type compiled so far, in compilation order."""
        return list(self._types.values())

    async def compile(self, addresses: Sequence[str]) -> CompiledNodeType:
        """Resolve ``addresses`` and compile them into a node type."""
        schemas = await self.resolver.resolve_all(addresses)
        return await self._compile_schemas(schemas)

    async def _compile_schemas(self, schemas: list[ResolvedSchema]) -> CompiledNodeType:
        resolved_addresses = tuple(sorted(s.address for s in schemas))
        identity = type_identity(resolved_addresses)
        cached = self._types.get(identity)
        if cached is not None:
            return cached

        node_type = CompiledNodeType(
            name=create_type_name(schemas, identity, self.config.type_hash_length),
            identity=identity,
            addresses=resolved_addresses,
        )
        self._types[identity] = node_type

        # Fields are compiled one at a time so each nested schema set hits
        # the cache before a sibling can build a duplicate type for it.
        declared: dict[str, tuple[str, ElementDefinition]] = {}
        for resolved in schemas:
            for key, definition in resolved.schema.elements.items():
                if key not in declared:
                    declared[key] = (resolved.address, definition)
                    node_type.fields[key] = await self._compile_field(key, definition)
                    continue
                owner, existing = declared[key]
                if definitions_equivalent(existing, definition):
                    continue
                if not await self._resolves_to(node_type.fields[key], definition):
                    raise SchemaConflictError(key, owner, resolved.address)

        if not node_type.fields:
            raise CompilationError(
                f"Type '{node_type.name}' has no fields; schemas {list(resolved_addresses)} define no elements"
            )
        logger.debug("compiled %s with fields %s", node_type.name, list(node_type.fields))
        return node_type

    async def _compile_field(self, key: str, definition: ElementDefinition) -> CompiledField:
        kind = ElementKind(definition.kind)
        if not isinstance(definition, NodeDefinition):
            return CompiledField(key=key, kind=kind, multiple=definition.multiple)
        if not definition.schemas:
            raise CompilationError(f"Node field '{key}' does not name any schemas")
        nested = await self.resolver.resolve_all(definition.schemas)
        return CompiledField(
            key=key,
            kind=kind,
            multiple=definition.multiple,
            schemas=tuple(definition.schemas),
            node=await self._compile_schemas(nested),
        )

    async def _resolves_to(self, field: CompiledField, definition: ElementDefinition) -> bool:
        """Whether a node definition names the same schema set as ``field``.

        Node definitions declaring different addresses (say, an alias and
        the schema it points at) are equivalent when they resolve to the
        same concrete schemas.
        """
        if not isinstance(definition, NodeDefinition) or field.node is None:
            return False
        if definition.multiple != field.multiple or not definition.schemas:
            return False
        nested = await self.resolver.resolve_all(definition.schemas)
        return type_identity([s.address for s in nested]) == field.node.identity


async def compile_fields(
    fetcher: ResourceFetcherInterface,
    addresses: Sequence[str],
    config: OmgraphConfig | None = None,
) -> CompiledNodeType:
    """Compile ``addresses`` with a fresh TypeCompiler."""
    return await TypeCompiler(fetcher, config).compile(addresses)
