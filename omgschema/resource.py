"""The tagged union of everything a content store can hold."""

from typing import Annotated, Any, Union

from pydantic import Field, TypeAdapter

from omgschema.document import Document
from omgschema.schema import Alias, Schema

Resource = Annotated[Union[Document, Schema, Alias], Field(discriminator="kind")]

RESOURCE_ADAPTER: TypeAdapter[Resource] = TypeAdapter(Resource)


def parse_resource(data: Any) -> Document | Schema | Alias:
    """Parse a wire-format mapping (or an already parsed model) into a resource.

    Raises:
        pydantic.ValidationError: If ``data`` is not a well-formed document,
            schema or alias.
    """
    if isinstance(data, (Document, Schema, Alias)):
        return data
    return RESOURCE_ADAPTER.validate_python(data)
