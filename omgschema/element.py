"""Document elements for the OpenMetaGraph format.

An OpenMetaGraph document is a flat list of typed key/value entries called
elements. Each element is discriminated by its ``kind`` field:

- **string**: a text value
- **number**: a numeric value
- **file**: a pointer to a file stored elsewhere (content type + URI)
- **node**: a reference to another document by content address

Keys may repeat inside a document; whether that is legal is decided by the
schema the document is read through, never by the document itself.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ElementKind(str, Enum):
    """The four kinds an element (and an element definition) can have."""

    STRING = "string"
    NUMBER = "number"
    FILE = "file"
    NODE = "node"


class StringElement(BaseModel):
    """A text value stored under ``key``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["string"] = "string"
    key: str = Field(min_length=1, description="Element key, defined by a schema.")
    value: str


class NumberElement(BaseModel):
    """A numeric value stored under ``key``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["number"] = "number"
    key: str = Field(min_length=1, description="Element key, defined by a schema.")
    value: float


class FileElement(BaseModel):
    """A URI to a file somewhere else, with its mime type."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    kind: Literal["file"] = "file"
    key: str = Field(min_length=1, description="Element key, defined by a schema.")
    content_type: str = Field(alias="contentType", description="A mime type, like 'image/gif'.")
    uri: str = Field(description="A URI, like ipfs://mycid, or https://example.com/foo.gif.")


class NodeElement(BaseModel):
    """A reference to another document by its content address."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["node"] = "node"
    key: str = Field(min_length=1, description="Element key, defined by a schema.")
    uri: str = Field(description="Content address of the referenced document.")


Element = Annotated[
    Union[StringElement, NumberElement, FileElement, NodeElement],
    Field(discriminator="kind"),
]
