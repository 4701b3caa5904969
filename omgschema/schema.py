"""Schemas and aliases: the shape declarations documents are read through.

A **schema** maps element keys to element definitions. A definition says
which kind of element the key holds and whether the key may repeat
(``multiple``). Node definitions additionally name the schemas the referenced
document must satisfy.

An **alias** is a named pointer to a set of schema (or alias) addresses. It
lets a document declare "conforms to this bundle" without hard-coding every
schema address. Aliases are expanded transitively when resolved.

Both are immutable once stored; "updating" a schema produces a new address.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class StringDefinition(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["string"] = "string"
    multiple: bool = False


class NumberDefinition(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["number"] = "number"
    multiple: bool = False


class FileDefinition(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["file"] = "file"
    multiple: bool = False


class NodeDefinition(BaseModel):
    """A key whose elements reference other documents."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["node"] = "node"
    multiple: bool = False
    schemas: list[str] = Field(
        default_factory=list,
        description="Schema or alias addresses the referenced document must satisfy.",
    )


ElementDefinition = Annotated[
    Union[StringDefinition, NumberDefinition, FileDefinition, NodeDefinition],
    Field(discriminator="kind"),
]


def definitions_equivalent(a: ElementDefinition, b: ElementDefinition) -> bool:
    """Return True if two definitions describe the same shape.

    Node definitions compare their schema lists as sets.
    """
    if a.kind != b.kind or a.multiple != b.multiple:
        return False
    if isinstance(a, NodeDefinition) and isinstance(b, NodeDefinition):
        return set(a.schemas) == set(b.schemas)
    return True


class Schema(BaseModel):
    """A named element map."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["schema"] = "schema"
    version: str = "0.1.0"
    name: str = Field(description="Human readable name, used to derive type names.")
    elements: dict[str, ElementDefinition] = Field(default_factory=dict)


class Alias(BaseModel):
    """A named pointer to schema or alias addresses."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["alias"] = "alias"
    version: str = "0.1.0"
    name: str
    schemas: list[str] = Field(default_factory=list)
