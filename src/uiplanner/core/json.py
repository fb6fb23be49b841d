"""Fast, type-safe JSON helpers backed by msgspec and orjson."""

from typing import Any
import json

import msgspec
import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


_decoder = msgspec.json.Decoder()


def decode_json(text: str) -> Any:
    """
    Strictly decode a JSON document of any shape.

    Args:
        text: JSON text

    Returns:
        Decoded value (dict, list, str, number, bool or None)

    Raises:
        JSONParseError: If the text is not a single valid JSON document
    """
    try:
        return _decoder.decode(text.encode("utf-8"))
    except (msgspec.DecodeError, RecursionError) as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Compact output matches the JavaScript ``JSON.stringify`` layout.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, ValueError):
            # orjson rejects integers outside the 64-bit range
            pass

        try:
            return msgspec.json.encode(obj).decode("utf-8")
        except (TypeError, ValueError, OverflowError):
            pass

        return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)

    return json.dumps(obj, indent=indent, ensure_ascii=False)


def canonical_json(obj: Any) -> str:
    """Serialize with sorted keys so equal structures produce equal text."""
    try:
        return orjson.dumps(obj, option=orjson.OPT_SORT_KEYS).decode("utf-8")
    except (TypeError, ValueError):
        return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def validate_json_size(data: str, max_size: int, name: str = "JSON") -> None:
    """
    Validate JSON size to prevent DoS attacks.

    Args:
        data: JSON string to validate
        max_size: Maximum allowed size in bytes
        name: Name for error messages

    Raises:
        JSONParseError: If size exceeds limit
    """
    size = len(data.encode("utf-8"))
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


__all__ = [
    "JSONParseError",
    "decode_json",
    "safe_json_dumps",
    "canonical_json",
    "validate_json_size",
]
