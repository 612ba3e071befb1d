"""Recursive editor over one record's working value.

The editor never mutates the value it is given. ``set_leaf`` and
``delete_node`` return a new root in which only the containers on the path
were rebuilt; a path that no longer resolves leaves the root untouched,
because the UI can hold callbacks created before an earlier edit removed
their target.
"""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .accessors import MISSING, delete_value_by_path, get_value_by_path, set_value_by_path
from .errors import StalePathReference
from .json_types import is_scalar
from .paths import FieldPath, ROOT_PATH, Segment, format_path, path_label
from .selection import SelectionSet

logger = logging.getLogger(__name__)

DEFAULT_DISCRIMINATOR_KEYS: Tuple[str, ...] = ("role",)


class ExpandState:
    """Expand/collapse flags keyed by path, kept outside the JSON value.

    Paths without a flag are expanded.
    """

    def __init__(self, flags: Optional[Dict[FieldPath, bool]] = None):
        self._flags: Dict[FieldPath, bool] = dict(flags or {})

    def is_expanded(self, path: FieldPath) -> bool:
        return self._flags.get(tuple(path), True)

    def set(self, path: FieldPath, expanded: bool) -> None:
        self._flags[tuple(path)] = bool(expanded)

    def toggle(self, path: FieldPath) -> bool:
        expanded = not self.is_expanded(path)
        self.set(path, expanded)
        return expanded

    def clear(self) -> None:
        self._flags.clear()


@dataclass
class EditorNode:
    path: FieldPath
    key: Optional[Segment]
    label: str
    kind: str  # "object", "array" or "leaf"
    value: Any = None
    children: List["EditorNode"] = field(default_factory=list)
    expanded: bool = True

    @property
    def is_leaf(self) -> bool:
        return self.kind == "leaf"

    def iter_leaves(self) -> Iterable["EditorNode"]:
        if self.is_leaf:
            yield self
            return
        for child in self.children:
            yield from child.iter_leaves()


def coerce_leaf_input(text: Any, previous: Any) -> Any:
    """Turn widget text back into a scalar.

    String leaves keep the text verbatim. Other leaves take the JSON reading
    of the text when it is a finite scalar, so ``42`` stays a number and
    ``true`` a boolean; anything else (``NaN``, ``Infinity``, ``1e999``) is
    stored as the raw text.
    """
    if not isinstance(text, str):
        return text
    if isinstance(previous, str):
        return text
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return text
    if isinstance(parsed, float) and not math.isfinite(parsed):
        return text
    return parsed if is_scalar(parsed) else text


def display_leaf_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


class TreeEditor:
    def __init__(self, selection: SelectionSet = frozenset(), discriminator_keys: Iterable[str] = DEFAULT_DISCRIMINATOR_KEYS):
        self.selection = frozenset(selection)
        self.discriminator_keys = tuple(discriminator_keys)

    # -- view ----------------------------------------------------------

    def header_label(self, path: FieldPath, container: Any) -> str:
        label = path_label(path)
        if isinstance(container, dict):
            for key in self.discriminator_keys:
                value = container.get(key)
                if key in container and is_scalar(value) and value not in (None, ""):
                    label += f" ({value})"
        return label

    def is_discriminator(self, key: Optional[Segment]) -> bool:
        return isinstance(key, str) and key in self.discriminator_keys

    def render(self, value: Any, expand_state: Optional[ExpandState] = None) -> Optional[EditorNode]:
        """Build the editable view of *value*.

        Containers always appear; scalar leaves appear only when selected and
        not folded into their parent's header.
        """
        expand_state = expand_state or ExpandState()
        return self._render(value, ROOT_PATH, None, expand_state)

    def _render(self, value: Any, path: FieldPath, key: Optional[Segment], expand_state: ExpandState) -> Optional[EditorNode]:
        if isinstance(value, dict):
            kind, items = "object", list(value.items())
        elif isinstance(value, list):
            kind, items = "array", list(enumerate(value))
        else:
            if path not in self.selection or self.is_discriminator(key):
                return None
            return EditorNode(path=path, key=key, label=path_label(path), kind="leaf", value=value)

        expanded = expand_state.is_expanded(path)
        node = EditorNode(
            path=path,
            key=key,
            label=self.header_label(path, value),
            kind=kind,
            expanded=expanded,
        )
        if expanded:
            for k, v in items:
                child = self._render(v, path + (k,), k, expand_state)
                if child is not None:
                    node.children.append(child)
        return node

    # -- mutation ------------------------------------------------------

    def set_leaf(self, root: Any, path: FieldPath, value: Any) -> Any:
        """Return *root* with the scalar at *path* replaced by *value*."""
        path = tuple(path)
        if not is_scalar(value):
            logger.debug("Ignoring non-scalar value for %s", format_path(path))
            return root
        if isinstance(value, float) and not math.isfinite(value):
            logger.debug("Ignoring non-finite number for %s", format_path(path))
            return root
        old = get_value_by_path(root, path)
        if old is MISSING:
            logger.debug("Stale edit ignored: %s no longer resolves", format_path(path))
            return root
        if not is_scalar(old):
            logger.debug("Ignoring leaf edit addressed at container %s", format_path(path))
            return root
        try:
            return set_value_by_path(root, path, value)
        except StalePathReference as exc:
            logger.debug("Stale edit ignored: %s", exc)
            return root

    def delete_node(self, root: Any, path: FieldPath) -> Any:
        """Return *root* without the node at *path*; descendants go with it."""
        path = tuple(path)
        try:
            return delete_value_by_path(root, path)
        except StalePathReference as exc:
            logger.debug("Stale delete ignored: %s", exc)
            return root
