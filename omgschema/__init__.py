"""
OpenMetaGraph Schema - Base Models and Interfaces

This package contains only Pydantic models and ABC interfaces with no
functional code. It defines:

- Document elements and documents
- Schemas, element definitions and aliases
- The resource union and its wire-format parser
- Fetch and store capability interfaces

These are used by omgraph (compilation, validation, resolution) and by
anything that implements a content store for it.
"""

from omgschema.document import Document
from omgschema.element import (
    Element,
    ElementKind,
    FileElement,
    NodeElement,
    NumberElement,
    StringElement,
)
from omgschema.resource import RESOURCE_ADAPTER, Resource, parse_resource
from omgschema.schema import (
    Alias,
    ElementDefinition,
    FileDefinition,
    NodeDefinition,
    NumberDefinition,
    Schema,
    StringDefinition,
    definitions_equivalent,
)
from omgschema.storage import ResourceFetcherInterface, ResourceStoreInterface

__all__ = [
    "Alias",
    "Document",
    "Element",
    "ElementDefinition",
    "ElementKind",
    "FileDefinition",
    "FileElement",
    "NodeDefinition",
    "NodeElement",
    "NumberDefinition",
    "NumberElement",
    "RESOURCE_ADAPTER",
    "Resource",
    "ResourceFetcherInterface",
    "ResourceStoreInterface",
    "Schema",
    "StringDefinition",
    "StringElement",
    "definitions_equivalent",
    "parse_resource",
]

__version__ = "0.1.0"
