from __future__ import annotations

from typing import Any, Callable

from .errors import StalePathReference
from .paths import FieldPath, is_index


class _Missing:
    def __repr__(self) -> str:
        return '<MISSING>'

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def _child(container: Any, segment, path: FieldPath, depth: int) -> Any:
    if isinstance(container, dict):
        if isinstance(segment, str) and segment in container:
            return container[segment]
    elif isinstance(container, list):
        if is_index(segment) and 0 <= segment < len(container):
            return container[segment]
    raise StalePathReference(path, depth)


def resolve_path(data: Any, path: FieldPath) -> Any:
    """Return the node at *path*, raising StalePathReference if it is gone.

    Keys only address objects and indices only address arrays; negative
    indices are not accepted.
    """
    node = data
    for depth, segment in enumerate(path):
        node = _child(node, segment, path, depth)
    return node


def get_value_by_path(data: Any, path: FieldPath, default: Any = MISSING) -> Any:
    """Retrieve the node at *path*, or *default* when the path does not resolve."""
    try:
        return resolve_path(data, path)
    except StalePathReference:
        return default


def has_path(data: Any, path: FieldPath) -> bool:
    return get_value_by_path(data, path) is not MISSING


def _replace_child(container: Any, segment, child: Any) -> Any:
    """New container equal to *container* except for one child; siblings are shared."""
    if isinstance(container, dict):
        return {k: (child if k == segment else v) for k, v in container.items()}
    return container[:segment] + [child] + container[segment + 1:]


def _without_child(container: Any, segment) -> Any:
    if isinstance(container, dict):
        return {k: v for k, v in container.items() if k != segment}
    return container[:segment] + container[segment + 1:]


def update_at_path(data: Any, path: FieldPath, fn: Callable[[Any], Any]) -> Any:
    """Rebuild *data* with the node at *path* replaced by ``fn(node)``.

    Only the containers on the path are copied; every other subtree is the
    same object in the result. Raises StalePathReference before building
    anything if the path does not resolve.
    """
    chain = [data]
    node = data
    for depth, segment in enumerate(path):
        node = _child(node, segment, path, depth)
        chain.append(node)

    new_node = fn(chain[-1])
    for depth in range(len(path) - 1, -1, -1):
        new_node = _replace_child(chain[depth], path[depth], new_node)
    return new_node


def set_value_by_path(data: Any, path: FieldPath, value: Any) -> Any:
    """Return a new root with *value* at an existing *path*; the root path returns *value*."""
    return update_at_path(data, path, lambda _old: value)


def delete_value_by_path(data: Any, path: FieldPath) -> Any:
    """Return a new root without the key/index at the end of *path*."""
    if not path:
        raise StalePathReference(path, 0)
    parent_path, segment = path[:-1], path[-1]

    def drop(parent):
        # Validates the terminal segment against the parent.
        _child(parent, segment, path, len(path) - 1)
        return _without_child(parent, segment)

    return update_at_path(data, parent_path, drop)
