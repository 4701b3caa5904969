"""Exception hierarchy for schema resolution, compilation and validation.

Every error raised by this package derives from :class:`OmgError`. Each
carries a short machine-readable ``code``; graphql-core copies
``extensions`` from the original exception into the response, so callers of
the GraphQL surface can branch on it.
"""

from typing import Any, Sequence


class OmgError(Exception):
    """Base class for all OpenMetaGraph errors."""

    code = "OMG_ERROR"

    @property
    def extensions(self) -> dict[str, Any]:
        return {"code": self.code}


# --- Resolution ---


class ResolutionError(OmgError):
    """An address could not be resolved to the expected resource."""

    code = "RESOLUTION_ERROR"

    def __init__(self, address: str, message: str):
        self.address = address
        super().__init__(message)


class FetchError(ResolutionError):
    """The fetch capability failed for an address."""

    code = "FETCH_FAILED"

    def __init__(self, address: str, reason: object):
        self.reason = reason
        super().__init__(address, f"Failed to fetch '{address}': {reason}")


class ResourceFormatError(ResolutionError):
    """The fetched value is not a well-formed document, schema or alias."""

    code = "MALFORMED_RESOURCE"

    def __init__(self, address: str, reason: object):
        self.reason = reason
        super().__init__(address, f"Resource at '{address}' is malformed: {reason}")


class UnexpectedResourceError(ResolutionError):
    """The address resolved, but to the wrong kind of resource."""

    code = "UNEXPECTED_RESOURCE"

    def __init__(self, address: str, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(address, f"Resource at '{address}' is a {actual}, expected a {expected}")


class AliasCycleError(ResolutionError):
    """Alias expansion revisited an address on its own chain."""

    code = "ALIAS_CYCLE"

    def __init__(self, chain: Sequence[str]):
        self.chain = tuple(chain)
        super().__init__(self.chain[-1], "Alias cycle detected: " + " -> ".join(self.chain))


# --- Compilation ---


class CompilationError(OmgError):
    """The schema set cannot be compiled into a typed surface."""

    code = "COMPILATION_ERROR"


class SchemaConflictError(CompilationError):
    """Two schemas (or one schema input) define the same key differently."""

    code = "SCHEMA_CONFLICT"

    def __init__(self, key: str, first: str, second: str):
        self.key = key
        self.first = first
        self.second = second
        super().__init__(f"Key '{key}' is defined differently by '{first}' and '{second}'")


class FieldNameError(CompilationError):
    """An element key cannot be used as a GraphQL field name."""

    code = "INVALID_FIELD_NAME"

    def __init__(self, key: str, addresses: Sequence[str], reason: object):
        self.key = key
        self.addresses = tuple(addresses)
        super().__init__(f"Key '{key}' of schemas {list(self.addresses)} is not a valid GraphQL field name: {reason}")


# --- Validation ---


class DocumentValidationError(OmgError):
    """A document or payload does not match the schema shape."""

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        key: str,
        message: str,
        *,
        expected: str | None = None,
        actual: str | None = None,
        details: list[dict[str, Any]] | None = None,
    ):
        self.key = key
        self.expected = expected
        self.actual = actual
        self.details = details or []
        super().__init__(message)


class UnknownKeyError(DocumentValidationError):
    code = "UNKNOWN_KEY"

    def __init__(self, key: str, **kwargs: Any):
        super().__init__(key, f"Key '{key}' is not defined by any of the schemas", **kwargs)


class ElementTypeError(DocumentValidationError):
    code = "WRONG_ELEMENT_TYPE"

    def __init__(self, key: str, expected: str, actual: str, **kwargs: Any):
        super().__init__(
            key,
            f"Invalid value for '{key}': expected {expected}, got {actual}",
            expected=expected,
            actual=actual,
            **kwargs,
        )


class CardinalityError(DocumentValidationError):
    code = "CARDINALITY"

    def __init__(self, key: str, count: int, **kwargs: Any):
        self.count = count
        if count == 0:
            message = f"'{key}' does not exist, but the schema requires exactly one"
        else:
            message = (
                f"'{key}' is marked as not multiple in the schema, "
                f"yet the document contains {count} instances"
            )
        super().__init__(key, message, expected="exactly one", actual=str(count), **kwargs)


# --- Capabilities and navigation ---


class StoreError(OmgError):
    """The store capability failed to persist a resource."""

    code = "STORE_FAILED"

    def __init__(self, kind: str, reason: object):
        self.kind = kind
        self.reason = reason
        super().__init__(f"Failed to store {kind}: {reason}")


class ElementKindError(OmgError):
    """An element view was read as the wrong kind."""

    code = "ELEMENT_KIND"

    def __init__(self, key: str, requested: str, actual: str):
        self.key = key
        self.requested = requested
        self.actual = actual
        super().__init__(f".as_{requested}() failed: '{key}' resolved to a {actual}")
