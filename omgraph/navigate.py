"""Schema-less navigation of documents.

``open_document`` gives a lightweight reader over one document that follows
node references on demand, without compiling any schema:

    node = await open_document(address, store)
    title = (await node.first("title")).as_string().value
    author = (await node.first("author")).as_node()

Each lookup returns ElementView objects; asking a view for the wrong kind
raises ElementKindError.
"""

import asyncio

from omgraph.capabilities import fetch_document
from omgraph.errors import ElementKindError
from omgschema import Document, FileElement, NodeElement, NumberElement, StringElement
from omgschema.element import Element
from omgschema.storage import ResourceFetcherInterface


class ElementView:
    """Either a scalar element or a resolved child document."""

    def __init__(self, key: str, value: "Element | DocumentNode"):
        self.key = key
        self.value = value

    def _kind(self) -> str:
        return "node" if isinstance(self.value, DocumentNode) else self.value.kind

    def _expect(self, requested: str, cls: type) -> object:
        if not isinstance(self.value, cls):
            raise ElementKindError(self.key, requested, self._kind())
        return self.value

    def as_node(self) -> "DocumentNode":
        return self._expect("node", DocumentNode)  # type: ignore[return-value]

    def as_string(self) -> StringElement:
        return self._expect("string", StringElement)  # type: ignore[return-value]

    def as_number(self) -> NumberElement:
        return self._expect("number", NumberElement)  # type: ignore[return-value]

    def as_file(self) -> FileElement:
        return self._expect("file", FileElement)  # type: ignore[return-value]


class DocumentNode:
    """A fetched document plus the fetcher used to follow its references."""

    def __init__(self, document: Document, fetcher: ResourceFetcherInterface):
        self.document = document
        self._fetcher = fetcher

    async def _view(self, element: Element) -> ElementView:
        if isinstance(element, NodeElement):
            child = await fetch_document(self._fetcher, element.uri)
            return ElementView(element.key, DocumentNode(child, self._fetcher))
        return ElementView(element.key, element)

    async def find(self, key: str) -> list[ElementView]:
        """All elements under ``key`` in document order, node references resolved."""
        return list(await asyncio.gather(*(self._view(e) for e in self.document.elements_for(key))))

    async def first(self, key: str) -> ElementView | None:
        elements = self.document.elements_for(key)
        return await self._view(elements[0]) if elements else None

    async def last(self, key: str) -> ElementView | None:
        elements = self.document.elements_for(key)
        return await self._view(elements[-1]) if elements else None


async def open_document(address: str, fetcher: ResourceFetcherInterface) -> DocumentNode:
    """Fetch the document at ``address`` for navigation."""
    return DocumentNode(await fetch_document(fetcher, address), fetcher)
