from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable, List, Optional

from .paths import FieldPath, ROOT_PATH, Segment, path_label

logger = logging.getLogger(__name__)

SelectionSet = FrozenSet[FieldPath]


@dataclass
class SelectionNode:
    """One node of the field selection tree.

    Containers carry children and render as groups; leaves render as
    checkboxes.
    """
    key: Optional[Segment]
    path: FieldPath
    children: List["SelectionNode"] = field(default_factory=list)
    is_leaf: bool = False

    @property
    def label(self) -> str:
        return path_label(self.path)


def extract_leaf_paths(data: Any, parent: FieldPath = ROOT_PATH) -> List[FieldPath]:
    """Recursively list every scalar leaf path in document order.

    Array elements are separate leaf positions, so a template taken from one
    record only covers the indices that record has.
    """
    if isinstance(data, dict):
        paths: List[FieldPath] = []
        for k, v in data.items():
            paths.extend(extract_leaf_paths(v, parent + (k,)))
        return paths
    if isinstance(data, list):
        paths = []
        for i, v in enumerate(data):
            paths.extend(extract_leaf_paths(v, parent + (i,)))
        return paths
    return [parent]


def build_selection_tree(data: Any, key: Optional[Segment] = None, path: FieldPath = ROOT_PATH) -> SelectionNode:
    """Mirror the shape of *data* as a SelectionNode tree."""
    if isinstance(data, dict):
        items = list(data.items())
    elif isinstance(data, list):
        items = list(enumerate(data))
    else:
        return SelectionNode(key=key, path=path, is_leaf=True)

    node = SelectionNode(key=key, path=path)
    for k, v in items:
        node.children.append(build_selection_tree(v, k, path + (k,)))
    return node


def toggle_path(selection: SelectionSet, path: FieldPath) -> SelectionSet:
    """Add *path* if absent, remove it if present."""
    path = tuple(path)
    if path in selection:
        return selection - {path}
    return selection | {path}


class FieldSelector:
    """Tracks which leaves of a representative record are exposed for editing.

    The template is usually the first loaded record. Toggling only changes
    the selection set; record data is never touched.
    """

    def __init__(self, template: Any = None, selection: Iterable[FieldPath] = ()):
        self.template = template
        self.leaves: List[FieldPath] = [] if template is None else extract_leaf_paths(template)
        self.tree: Optional[SelectionNode] = None if template is None else build_selection_tree(template)
        self.selection: SelectionSet = frozenset(tuple(p) for p in selection)

    def __len__(self) -> int:
        return len(self.selection)

    def __contains__(self, path) -> bool:
        return self.is_selected(path)

    def is_selected(self, path: FieldPath) -> bool:
        return tuple(path) in self.selection

    def toggle(self, path: FieldPath) -> SelectionSet:
        self.selection = toggle_path(self.selection, path)
        logger.debug("Toggled %r; %d field(s) selected", tuple(path), len(self.selection))
        return self.selection

    def set_selected(self, path: FieldPath, selected: bool) -> SelectionSet:
        if self.is_selected(path) != bool(selected):
            self.toggle(path)
        return self.selection

    def select_all(self) -> SelectionSet:
        self.selection = self.selection | frozenset(self.leaves)
        return self.selection

    def clear(self) -> SelectionSet:
        self.selection = frozenset()
        return self.selection

    def selected_paths(self) -> List[FieldPath]:
        """Selected template leaves, in document order."""
        return [p for p in self.leaves if p in self.selection]
