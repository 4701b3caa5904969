"""Canonical serialization and content addressing.

Stores must hand out the same address for the same content. Because a
schema's element map is unordered, the canonical form sorts every JSON
object's keys; list order (document elements, schema address lists) is kept
as-is since it is significant.
"""

import hashlib
import json

from omgschema import Alias, Document, Schema


def canonical_dict(resource: Document | Schema | Alias) -> dict:
    """Return the wire-format mapping of a resource."""
    return resource.model_dump(mode="json", by_alias=True)


def canonical_json(resource: Document | Schema | Alias) -> bytes:
    """Serialize a resource to its canonical JSON bytes."""
    return json.dumps(
        canonical_dict(resource),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")


def content_address(data: bytes, prefix: str = "") -> str:
    """Derive a content address from canonical bytes."""
    return prefix + hashlib.sha256(data).hexdigest()
