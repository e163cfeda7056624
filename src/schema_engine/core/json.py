"""JSON extraction for model output and compact encoding for documents."""

from typing import Any
import json

import msgspec
import orjson
from json_repair import repair_json


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def _strip_fences(text: str) -> str:
    """Return the body of the first markdown code fence, or the text unchanged."""
    if "```" not in text:
        return text

    if "```json" in text:
        start = text.find("```json") + 7
    else:
        start = text.find("```") + 3

    end = text.find("```", start)
    if end == -1:
        return text[start:].strip()
    return text[start:end].strip()


def extract_json_object(text: str) -> str | None:
    """
    Locate the outermost JSON object in free-form text.

    Args:
        text: Text potentially containing JSON (prose, code fences)

    Returns:
        The JSON object substring, or None if no braces were found
    """
    working_text = _strip_fences(text.strip())

    start = working_text.find("{")
    end = working_text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None

    return working_text[start : end + 1]


def _as_object(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        raise JSONParseError(f"Expected object, got {type(result).__name__}")
    return result


def extract_json(text: str, repair: bool = True) -> dict[str, Any]:
    """
    Extract and parse a JSON object from model output.

    Tries msgspec first, then the standard library, and finally
    json_repair for truncated or slightly malformed output.

    Args:
        text: Text containing JSON
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Parsed JSON object

    Raises:
        JSONParseError: If no object can be recovered
    """
    json_str = extract_json_object(text)
    if json_str is None:
        raise JSONParseError("No JSON object found in text")

    try:
        return _as_object(msgspec.json.decode(json_str.encode("utf-8")))
    except msgspec.DecodeError as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e) from e

    try:
        return _as_object(json.loads(json_str))
    except json.JSONDecodeError:
        pass

    try:
        repaired = repair_json(json_str)
        return _as_object(json.loads(repaired))
    except (ValueError, TypeError) as repair_error:
        raise JSONParseError(f"JSON repair failed: {repair_error}", repair_error) from repair_error


def safe_json_dumps(obj: Any, indent: int = 0) -> str:
    """
    Encode object to a JSON string.

    Args:
        obj: Object to encode
        indent: Pretty-print indentation (0 for compact)

    Returns:
        JSON string
    """
    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, orjson.JSONEncodeError):
            # Integers outside 64-bit range and similar edge cases
            pass
    elif indent == 2:
        try:
            return orjson.dumps(obj, option=orjson.OPT_INDENT_2).decode("utf-8")
        except (TypeError, orjson.JSONEncodeError):
            pass

    return json.dumps(obj, indent=indent if indent > 0 else None)


def validate_json_size(data: str, max_size: int, name: str = "JSON") -> None:
    """
    Reject oversized input before parsing it.

    Raises:
        JSONParseError: If the UTF-8 size exceeds the limit
    """
    size = len(data.encode("utf-8"))
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")
