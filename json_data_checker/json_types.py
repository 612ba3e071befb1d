"""JSON value aliases and kind helpers.

Values are plain Python containers as produced by ``json.loads``: ``dict``
keeps key insertion order, which export relies on.
"""
from __future__ import annotations

from typing import Dict, List, Union

JSONScalar = Union[str, int, float, bool, None]
JSONValue = Union[JSONScalar, List["JSONValue"], Dict[str, "JSONValue"]]
JSONObject = Dict[str, JSONValue]
JSONArray = List[JSONValue]

SCALAR_TYPES = (str, int, float, bool, type(None))


def is_scalar(value) -> bool:
    return isinstance(value, SCALAR_TYPES)


def json_kind(value) -> str:
    """Name the JSON kind of *value*: object, array, string, number, boolean or null."""
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is None:
        return "null"
    raise TypeError(f"not a JSON value: {type(value).__name__}")
