"""Document representation for the OpenMetaGraph format."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from omgschema.element import Element


class Document(BaseModel):
    """An immutable OpenMetaGraph document.

    A document's identity is its content address, assigned by the store when
    it is persisted. The ``schemas`` list records what the producer claimed
    the document conforms to; readers decide for themselves which schemas to
    read it through.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["document"] = "document"
    version: str = Field(default="0.1.0", description="Format version.")
    schemas: list[str] = Field(
        default_factory=list,
        description="Schema or alias addresses the producer built this document against.",
    )
    elements: list[Element] = Field(
        default_factory=list,
        description="Flat element list; order is significant and preserved on the wire.",
    )

    def elements_for(self, key: str) -> list[Element]:
        """Return every element stored under ``key``, in document order."""
        return [element for element in self.elements if element.key == key]
