"""Validate documents and raw payloads against a compiled schema shape.

Two kinds of candidates are checked:

- **Payloads**: nested JSON-like input, as accepted by ``createDocument``.
  Node keys hold nested payloads. These are validated by pydantic models
  generated from the compiled type graph at call time (``create_model``).
  Scalars use strict types so text is never coerced to numbers, and extra
  keys are forbidden. Non-multiple keys are required; multiple keys default to an
  empty list. Recursive schemas become models with forward references,
  resolved once every model exists.

- **Documents**: the canonical flat element list. Each element's key must be
  defined, its kind must match the definition, and every non-multiple key
  must occur exactly once. Referenced node documents are not fetched.

The first failure is raised as a DocumentValidationError subtype; the full
pydantic error list is kept on ``details``.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictStr, ValidationError, create_model

from omgraph.compiler import CompiledField, CompiledNodeType, TypeCompiler, reachable_types
from omgraph.config import OmgraphConfig
from omgraph.errors import CardinalityError, DocumentValidationError, ElementTypeError, UnknownKeyError
from omgschema import Document, ElementKind
from omgschema.storage import ResourceFetcherInterface

PAYLOAD_CONFIG = ConfigDict(extra="forbid", frozen=True)


class FileValue(BaseModel):
    """The payload shape of a file element."""

    model_config = PAYLOAD_CONFIG

    contentType: StrictStr
    uri: StrictStr


_SCALAR_ANNOTATIONS = {
    ElementKind.STRING: "StrictStr",
    ElementKind.NUMBER: "StrictFloat",
    ElementKind.FILE: "FileValue",
}

_EXPECTED = {
    ElementKind.STRING: "text",
    ElementKind.NUMBER: "a number",
    ElementKind.FILE: "a {contentType, uri} record",
    ElementKind.NODE: "a nested document",
}


def _model_name(node_type: CompiledNodeType) -> str:
    return f"{node_type.name}Payload"


def _annotation(field: CompiledField) -> str:
    if field.kind == ElementKind.NODE:
        inner = _model_name(field.target)
    else:
        inner = _SCALAR_ANNOTATIONS[field.kind]
    return f"list[{inner}]" if field.multiple else inner


def build_payload_models(root: CompiledNodeType) -> dict[str, type[BaseModel]]:
    """Create one strict pydantic model per node type reachable from ``root``.

    Field names are positional (``f0``, ``f1``...) with the element key as
    alias, since element keys need not be valid Python identifiers.

    Returns:
        Models keyed by node type identity.
    """
    models: dict[str, type[BaseModel]] = {}
    for node_type in reachable_types(root):
        definitions: dict[str, Any] = {}
        for index, (key, field) in enumerate(node_type.fields.items()):
            if field.multiple:
                info = Field(default_factory=list, alias=key)
            else:
                info = Field(alias=key)
            definitions[f"f{index}"] = (_annotation(field), info)
        models[node_type.identity] = create_model(
            _model_name(node_type),
            __config__=PAYLOAD_CONFIG,
            **definitions,
        )

    namespace: dict[str, Any] = {"FileValue": FileValue, "StrictStr": StrictStr, "StrictFloat": StrictFloat}
    namespace.update({model.__name__: model for model in models.values()})
    for model in models.values():
        model.model_rebuild(_types_namespace=namespace)
    return models


def _describe(value: Any) -> str:
    if isinstance(value, Mapping):
        return "an object"
    if isinstance(value, list):
        return "a list"
    if value is None:
        return "null"
    return type(value).__name__


def _location(loc: Sequence[Any]) -> str:
    return ".".join(str(part) for part in loc)


def _error_from_pydantic(root: CompiledNodeType, error: ValidationError) -> DocumentValidationError:
    details = error.errors(include_url=False)
    first = details[0]
    loc = first["loc"]
    key = _location(loc)
    field, at_key = _walk(root, loc)
    if first["type"] == "missing" and at_key:
        return CardinalityError(key, 0, details=details)
    if first["type"] == "extra_forbidden" and (field is None or field.kind == ElementKind.NODE):
        return UnknownKeyError(key, details=details)
    expected = _expected_for(field, loc, at_key) or first["msg"]
    return ElementTypeError(key, expected, _describe(first.get("input")), details=details)


def _walk(root: CompiledNodeType, loc: Sequence[Any]) -> tuple[CompiledField | None, bool]:
    """Follow an error location through the compiled graph.

    Returns the deepest element field on the way and whether the location
    ends at that field (possibly at one of its list items) rather than
    inside a file value.
    """
    node_type: CompiledNodeType | None = root
    field: CompiledField | None = None
    for part in loc:
        if isinstance(part, int):
            continue
        if node_type is None or part not in node_type.fields:
            return field, False
        field = node_type.fields[part]
        node_type = field.node
    return field, field is not None


def _expected_for(field: CompiledField | None, loc: Sequence[Any], at_key: bool) -> str | None:
    if field is None:
        return None
    expected = _EXPECTED[field.kind]
    return f"a list of {expected}" if at_key and field.multiple and loc[-1] == field.key else expected


@dataclass
class Validator:
    """A structural validator for one merged schema set."""

    root: CompiledNodeType
    models: dict[str, type[BaseModel]]

    @classmethod
    def from_compiled(cls, root: CompiledNodeType) -> "Validator":
        return cls(root=root, models=build_payload_models(root))

    @property
    def model(self) -> type[BaseModel]:
        """The payload model of the root type."""
        return self.models[self.root.identity]

    def validate_payload(self, payload: Any) -> dict[str, Any]:
        """Validate a nested payload.

        Returns:
            The normalized payload keyed by element key: multiple keys
            always present as lists, numbers as floats.

        Raises:
            DocumentValidationError: On the first structural mismatch.
        """
        if not isinstance(payload, Mapping):
            raise ElementTypeError("", "an object", _describe(payload))
        try:
            validated = self.model.model_validate(dict(payload))
        except ValidationError as e:
            raise _error_from_pydantic(self.root, e) from e
        return validated.model_dump(by_alias=True)

    def validate_document(self, document: Document) -> Document:
        """Validate a flat document's keys, element kinds and cardinality."""
        fields = self.root.fields
        for element in document.elements:
            field = fields.get(element.key)
            if field is None:
                raise UnknownKeyError(element.key)
            if element.kind != field.kind:
                raise ElementTypeError(element.key, f"a {field.kind.value} element", f"a {element.kind} element")
        counts = Counter(element.key for element in document.elements)
        for key, field in fields.items():
            if not field.multiple and counts[key] != 1:
                raise CardinalityError(key, counts[key])
        return document


def validate(candidate: Document | Mapping[str, Any], validator: Validator) -> Document | dict[str, Any]:
    """Validate a document or a raw payload against ``validator``."""
    if isinstance(candidate, Document):
        return validator.validate_document(candidate)
    return validator.validate_payload(candidate)


async def build_validator(
    fetcher: ResourceFetcherInterface,
    addresses: Sequence[str],
    config: OmgraphConfig | None = None,
) -> Validator:
    """Resolve and compile ``addresses``, then build their validator."""
    root = await TypeCompiler(fetcher, config).compile(addresses)
    return Validator.from_compiled(root)
