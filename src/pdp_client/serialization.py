"""JSON encode/decode boundary.

Requests are encoded to UTF-8 JSON bytes. Responses decode to one of two
shapes: a generic JSON tree (any JSON value) or a string-keyed mapping.
Functions here are stateless and safe to share across threads.
"""

from __future__ import annotations

__all__ = [
    "decode_mapping",
    "decode_tree",
    "encode_request",
]

import json
from typing import Any

from pydantic import BaseModel, JsonValue

from pdp_client.exceptions import DeserializationError, SerializationError


def encode_request(value: Any) -> bytes:
    """Encode a request value as UTF-8 JSON.

    Args:
        value: Any JSON-serializable value, or a pydantic model (e.g. PdpRequest).

    Returns:
        JSON bytes.

    Raises:
        SerializationError: If the value cannot be represented as JSON
            (unsupported type, circular reference, NaN/Infinity, non-string keys
            that json cannot coerce).
    """
    try:
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        text = json.dumps(value, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(str(e)) from e
    return text.encode("utf-8")


def _reject_constant(token: str) -> None:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"invalid constant {token!r}")


def decode_tree(content: bytes) -> JsonValue:
    """Decode a response body into a generic JSON tree.

    Args:
        content: Raw response body, interpreted as UTF-8.

    Returns:
        The decoded JSON value (object, array, string, number, bool or None).

    Raises:
        DeserializationError: If the body is not valid UTF-8 JSON (NaN and
            Infinity are rejected) or is nested too deeply to decode.
    """
    try:
        return json.loads(content.decode("utf-8"), parse_constant=_reject_constant)
    except UnicodeDecodeError as e:
        raise DeserializationError(f"response body is not valid UTF-8: {e}") from e
    except ValueError as e:
        raise DeserializationError(f"response body is not valid JSON: {e}") from e
    except RecursionError as e:
        raise DeserializationError("response body is nested too deeply") from e


def decode_mapping(content: bytes) -> dict[str, JsonValue]:
    """Decode a response body into a string-keyed mapping.

    Values are left as arbitrary JSON (nested objects stay dicts).

    Args:
        content: Raw response body, interpreted as UTF-8.

    Returns:
        Top-level JSON object as a dict.

    Raises:
        DeserializationError: If the body is not valid JSON or is not an object.
    """
    tree = decode_tree(content)
    if not isinstance(tree, dict):
        raise DeserializationError(f"expected a JSON object, got {type(tree).__name__}")
    return tree
