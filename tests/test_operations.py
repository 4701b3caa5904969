"""Tests for the plain async operations behind the GraphQL surface.

Covers:
- Building schemas from per-kind key lists
- create_schema / create_alias / create_document
- read_field cardinality, kind checks and node following
"""

import pytest
from pydantic import ValidationError

from omgraph.compiler import compile_fields
from omgraph.config import OmgraphConfig
from omgraph.errors import (
    CardinalityError,
    ElementTypeError,
    SchemaConflictError,
    UnexpectedResourceError,
)
from omgraph.operations import (
    SchemaInput,
    build_schema,
    create_alias,
    create_document,
    create_schema,
    get_document,
    read_field,
)
from omgschema import Alias, Document, FileElement, NodeDefinition, NodeElement, Schema, StringElement, parse_resource

from tests.conftest import ReversingStore, put_schema


class TestBuildSchema:
    """Test build_schema."""

    def test_per_kind_lists(self):
        schema = build_schema(
            SchemaInput(
                name="post",
                strings=[{"key": "title"}],
                numbers=[{"key": "width"}],
                files=[{"key": "photos", "multiple": True}],
                nodes=[{"key": "author", "schemas": ["omg://person"]}],
            )
        )

        assert list(schema.elements) == ["author", "photos", "title", "width"]
        assert schema.elements["photos"].multiple is True
        assert schema.elements["title"].kind == "string"
        assert schema.elements["author"] == NodeDefinition(schemas=["omg://person"])

    def test_duplicate_key_across_kinds(self):
        with pytest.raises(SchemaConflictError) as exc_info:
            build_schema(SchemaInput(name="post", strings=[{"key": "x"}], numbers=[{"key": "x"}]))

        assert exc_info.value.key == "x"

    def test_duplicate_key_within_kind(self):
        with pytest.raises(SchemaConflictError):
            build_schema(SchemaInput(name="post", strings=[{"key": "x"}, {"key": "x", "multiple": True}]))

    def test_node_key_requires_schemas(self):
        with pytest.raises(ValidationError):
            SchemaInput(name="post", nodes=[{"key": "author", "schemas": []}])


class TestCreate:
    """Test the create_* operations."""

    async def test_create_schema(self, store):
        address = await create_schema(store, {"name": "post", "strings": [{"key": "title"}]})

        schema = parse_resource(await store.fetch(address))
        assert isinstance(schema, Schema)
        assert schema.name == "post"
        assert list(schema.elements) == ["title"]

    async def test_create_schema_is_content_addressed(self, store):
        a = await create_schema(store, {"name": "p", "strings": [{"key": "a"}, {"key": "b"}]})
        b = await create_schema(store, {"name": "p", "strings": [{"key": "b"}, {"key": "a"}]})

        assert a == b

    async def test_create_schema_stamps_version(self, store):
        address = await create_schema(store, {"name": "p", "strings": [{"key": "a"}]}, OmgraphConfig(version="0.2.0"))

        assert (await store.fetch(address))["version"] == "0.2.0"

    async def test_create_alias_does_not_resolve_targets(self, store):
        address = await create_alias(store, {"name": "bundle", "schemas": ["omg://not-there"]})

        alias = parse_resource(await store.fetch(address))
        assert alias == Alias(name="bundle", schemas=["omg://not-there"])

    async def test_create_document(self, store):
        s1 = await put_schema(store, "post", {"title": "string"})

        address = await create_document(store, store, {"title": "hello"}, [s1])

        doc = await get_document(store, address)
        assert doc == Document(schemas=[s1], elements=[StringElement(key="title", value="hello")])

    async def test_get_document_rejects_schema(self, store):
        s1 = await put_schema(store, "post", {"title": "string"})

        with pytest.raises(UnexpectedResourceError):
            await get_document(store, s1)


class TestReadField:
    """Test read_field against compiled fields."""

    @pytest.fixture
    async def fields(self, store):
        person = await put_schema(store, "person", {"name": "string"})
        post = await put_schema(
            store,
            "post",
            {"title": "string", "tags": "string*", "photo": "file", "authors": ("node*", [person])},
        )
        root = await compile_fields(store, [post])
        return root.fields

    async def test_single_value(self, fields, store):
        doc = Document(elements=[StringElement(key="title", value="hello")])

        assert await read_field(doc, fields["title"], store) == "hello"

    async def test_multiple_values_in_order(self, fields, store):
        doc = Document(elements=[StringElement(key="tags", value=v) for v in ("b", "a")])

        assert await read_field(doc, fields["tags"], store) == ["b", "a"]

    async def test_multiple_absent_is_empty(self, fields, store):
        assert await read_field(Document(), fields["tags"], store) == []

    async def test_single_absent(self, fields, store):
        with pytest.raises(CardinalityError, match="does not exist"):
            await read_field(Document(), fields["title"], store)

    async def test_single_repeated(self, fields, store):
        doc = Document(elements=[StringElement(key="title", value=v) for v in ("a", "b")])

        with pytest.raises(CardinalityError, match="not multiple"):
            await read_field(doc, fields["title"], store)

    async def test_file_value(self, fields, store):
        doc = Document(elements=[FileElement(key="photo", content_type="image/gif", uri="ipfs://g")])

        assert await read_field(doc, fields["photo"], store) == {"contentType": "image/gif", "uri": "ipfs://g"}

    async def test_wrong_element_kind(self, fields, store):
        doc = Document(elements=[NodeElement(key="title", uri="omg://x")])

        with pytest.raises(ElementTypeError):
            await read_field(doc, fields["title"], store)

    async def test_follows_node_references(self, fields, store):
        alice = await store.store(Document(elements=[StringElement(key="name", value="alice")]))
        bob = await store.store(Document(elements=[StringElement(key="name", value="bob")]))
        doc = Document(elements=[NodeElement(key="authors", uri=alice), NodeElement(key="authors", uri=bob)])

        authors = await read_field(doc, fields["authors"], store)

        assert [a.elements[0].value for a in authors] == ["alice", "bob"]

    async def test_out_of_order_node_fetches_keep_document_order(self, fields, store):
        addresses = [
            await store.store(Document(elements=[StringElement(key="name", value=name)]))
            for name in ("ann", "bo", "cy")
        ]
        fetcher = ReversingStore(store)
        doc = Document(elements=[NodeElement(key="authors", uri=address) for address in addresses])

        authors = await read_field(doc, fields["authors"], fetcher)

        assert fetcher.completed == addresses[::-1]
        assert [a.elements[0].value for a in authors] == ["ann", "bo", "cy"]
