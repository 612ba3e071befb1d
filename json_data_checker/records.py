from __future__ import annotations

import enum
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, List, Tuple

from .errors import InvalidShape
from .json_types import JSONValue, json_kind


class DocumentShape(enum.Enum):
    """How the loaded payload maps onto records."""

    CONTAINER = "container"  # object with an array-valued field; one record
    ARRAY = "array"  # array of objects; one record per element
    OBJECT = "object"  # object with a nested object field; one record

    @property
    def single_document(self) -> bool:
        return self is not DocumentShape.ARRAY


@dataclass
class Record:
    id: str
    original: JSONValue
    edited: JSONValue

    @property
    def is_modified(self) -> bool:
        return self.edited != self.original


def find_array_fields(data: Any) -> List[str]:
    """Top-level keys of *data* whose values are arrays of a single JSON kind."""
    if not isinstance(data, dict):
        return []
    fields: List[str] = []
    for k, v in data.items():
        if isinstance(v, list) and len({json_kind(item) for item in v}) <= 1:
            fields.append(k)
    return fields


def resolve_document(data: Any) -> Tuple[List[Any], DocumentShape]:
    """Resolve a parsed payload into record items.

    Accepts:
    - dict exposing an array-valued field of homogeneous entries -> one item
    - list[dict] -> one item per element
    - dict with a nested object field -> one item
    Anything else raises InvalidShape.
    """
    if isinstance(data, list):
        bad = [i for i, item in enumerate(data) if not isinstance(item, dict)]
        if bad:
            raise InvalidShape(
                f"Expected an array of objects; element {bad[0]} is {json_kind(data[bad[0]])}."
            )
        return list(data), DocumentShape.ARRAY

    if isinstance(data, dict):
        if find_array_fields(data):
            return [data], DocumentShape.CONTAINER
        if any(isinstance(v, dict) for v in data.values()):
            return [data], DocumentShape.OBJECT
        raise InvalidShape(
            "Expected an array of objects, or an object with an array field or nested object."
        )

    raise InvalidShape(f"Expected an object or an array at the top level, got {json_kind(data)}.")


def build_records(items: List[Any], id_prefix: str = 'item-') -> List[Record]:
    """One Record per item; original and edited are independent deep copies."""
    return [
        Record(id=f"{id_prefix}{index}", original=deepcopy(item), edited=deepcopy(item))
        for index, item in enumerate(items)
    ]


def is_single_document(data: Any) -> bool:
    """True when *data* on its own loads back as a single-document shape."""
    try:
        _, shape = resolve_document(data)
    except InvalidShape:
        return False
    return shape.single_document
