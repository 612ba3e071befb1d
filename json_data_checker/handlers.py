"""Gradio event handlers.

Each handler takes the per-session ``CollectionStore`` and returns it along
with the values of the output components. Re-rendering is driven by integer
version states: ``loaded`` re-renders the field selector, ``view`` the record
window. A handler bumps a version only when something visible changed.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import gradio as gr

from .accessors import MISSING, get_value_by_path
from .editor import ExpandState, coerce_leaf_input
from .errors import InvalidShape, ParseFailure
from .exporter import write_export_file
from .io_utils import parse_json_text, read_json_content
from .paths import FieldPath, format_path
from .store import CollectionStore

logger = logging.getLogger(__name__)


def ensure_store(store: Optional[CollectionStore]) -> CollectionStore:
    return store if store is not None else CollectionStore()


def _load(store, loaded_version, view_version, expand_states, read):
    store = ensure_store(store)
    try:
        data = read()
        records = store.load(data)
    except (ParseFailure, InvalidShape) as exc:
        logger.warning("Load rejected: %s", exc)
        status = f"Error: {exc}"
        if store.is_loaded:
            status += f" Keeping the {len(store)} record(s) already loaded."
        return store, loaded_version, view_version, expand_states, status, store.page_label(), store.summary()

    status = f"Successfully loaded {len(records)} record(s). Found {len(store.selector.leaves)} selectable fields."
    return store, loaded_version + 1, view_version + 1, {}, status, store.page_label(), store.summary()


def load_file_handler(file_obj, store, loaded_version, view_version, expand_states):
    return _load(store, loaded_version, view_version, expand_states, lambda: read_json_content(file_obj))


def load_text_handler(text, store, loaded_version, view_version, expand_states):
    result = _load(store, loaded_version, view_version, expand_states, lambda: parse_json_text(text))
    # Clear the paste box only when the load went through.
    text_update = "" if result[1] != loaded_version else gr.update()
    return result + (text_update,)


def toggle_field_handler(path: FieldPath, is_selected, store, view_version):
    store = ensure_store(store)
    if store.selector.is_selected(path) == bool(is_selected):
        return store, view_version
    store.toggle_field(path)
    return store, view_version + 1


def select_all_handler(store, loaded_version, view_version):
    store = ensure_store(store)
    store.selector.select_all()
    return store, loaded_version + 1, view_version + 1


def clear_selection_handler(store, loaded_version, view_version):
    store = ensure_store(store)
    store.selector.clear()
    return store, loaded_version + 1, view_version + 1


def _page_outputs(store, view_version, before):
    after = (store.page_index, store.page_size, len(store))
    version = view_version + 1 if after != before else view_version
    return store, version, store.page_label(), store.summary()


def change_page_handler(delta: int, store, view_version):
    store = ensure_store(store)
    before = (store.page_index, store.page_size, len(store))
    store.set_page(store.page_index + delta)
    return _page_outputs(store, view_version, before)


def page_size_handler(page_size, store, view_version):
    store = ensure_store(store)
    before = (store.page_index, store.page_size, len(store))
    if page_size:
        store.set_page_size(int(page_size))
    return _page_outputs(store, view_version, before)


def edit_leaf_handler(record_id: str, path: FieldPath, text, store, view_version):
    store = ensure_store(store)
    record = store.get(record_id)
    if record is None:
        return store, view_version
    previous = get_value_by_path(record.edited, path)
    if previous is MISSING:
        logger.debug("Edit of %s in %s ignored; path is gone", format_path(path), record_id)
        return store, view_version
    value = coerce_leaf_input(text, previous)
    if value == previous and type(value) is type(previous):
        return store, view_version
    if store.set_leaf(record_id, path, value):
        return store, view_version + 1
    return store, view_version


def delete_node_handler(record_id: str, path: FieldPath, store, view_version):
    store = ensure_store(store)
    version = view_version + 1 if store.delete_node(record_id, path) else view_version
    return store, version, store.page_label(), store.summary()


def move_record_handler(source_index: int, destination_index: int, store, view_version):
    """Reorder intent relative to the visible window."""
    store = ensure_store(store)
    if store.reorder_visible(source_index, destination_index):
        return store, view_version + 1
    return store, view_version


def move_to_position_handler(record_id: str, position, store, view_version):
    """Move a record to a 1-based position in the full collection."""
    store = ensure_store(store)
    if position is None:
        return store, view_version
    source = store.index_of(record_id)
    if source < 0:
        return store, view_version
    if store.reorder(source, int(position) - 1):
        return store, view_version + 1
    return store, view_version


def set_expanded_handler(record_id: str, path: FieldPath, expanded: bool, expand_states: Dict[str, Any], view_version):
    expand_states = dict(expand_states or {})
    state = expand_states.get(record_id) or ExpandState()
    state.set(path, expanded)
    expand_states[record_id] = state
    # Collapsed containers render without children, so expanding needs a redraw.
    return expand_states, view_version + 1 if expanded else view_version


def export_handler(store, file_name):
    store = ensure_store(store)
    if not store.is_loaded:
        return None, "No data loaded."
    try:
        content = store.export_json()
    except ValueError as exc:
        logger.warning("Export refused: %s", exc)
        return None, f"Error during export: {exc}"
    try:
        path = write_export_file(content, file_name, store.config.export_file_name)
    except OSError as exc:
        logger.warning("Export failed: %s", exc)
        return None, f"Error during export: {exc}"
    return path, f"Export successful! Saved {len(store)} record(s) to {path}"
