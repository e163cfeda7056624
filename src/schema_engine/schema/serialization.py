"""Document (de)serialization in the camelCase wire shape."""

from typing import Any

import orjson

from ..core.json import JSONParseError, safe_json_dumps
from .models import Schema


def schema_to_dict(schema: Schema) -> dict[str, Any]:
    """Plain JSON-compatible mapping of a document."""
    return schema.model_dump(mode="json", by_alias=True, exclude_none=True)


def schema_to_json(schema: Schema, indent: int = 0) -> str:
    return safe_json_dumps(schema_to_dict(schema), indent=indent)


def schema_from_json(text: str | bytes) -> Schema:
    """
    Load a previously serialized document.

    Unlike candidate parsing this expects well-formed JSON: it is meant for
    documents this engine produced.

    Raises:
        JSONParseError: If the text is not a JSON object
        pydantic.ValidationError: If the object is not a document
    """
    try:
        data = orjson.loads(text)
    except orjson.JSONDecodeError as e:
        raise JSONParseError(f"Invalid document JSON: {e}", e) from e
    if not isinstance(data, dict):
        raise JSONParseError(f"Expected object, got {type(data).__name__}")
    return Schema.model_validate(data)
