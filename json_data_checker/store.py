"""
Ordered record collection with pagination.

``CollectionStore`` owns the records of one loaded payload, the field
selection built from the first record, and the current page. Every
operation runs to completion synchronously; ``load`` either replaces all of
that state or, on ParseFailure/InvalidShape, none of it.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Optional

from .config import DEFAULT_CONFIG, CheckerConfig
from .editor import TreeEditor
from .exporter import export_json, export_payload
from .io_utils import parse_json_text
from .json_types import JSONValue
from .paths import FieldPath
from .records import DocumentShape, Record, build_records, resolve_document
from .selection import FieldSelector

logger = logging.getLogger(__name__)


def page_count(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / max(1, page_size)))


def clamp_page(page_index: int, total: int, page_size: int) -> int:
    return min(max(1, int(page_index)), page_count(total, page_size))


@dataclass(frozen=True)
class PageWindow:
    """A projection of the ordered records onto one page."""
    page_index: int
    page_size: int
    start: int
    total: int
    records: List[Record]

    @property
    def page_count(self) -> int:
        return page_count(self.total, self.page_size)

    @property
    def end(self) -> int:
        return self.start + len(self.records)

    @property
    def has_previous(self) -> bool:
        return self.page_index > 1

    @property
    def has_next(self) -> bool:
        return self.page_index < self.page_count


class CollectionStore:
    def __init__(self, config: CheckerConfig = DEFAULT_CONFIG):
        self.config = config
        self.records: List[Record] = []
        self.shape: Optional[DocumentShape] = None
        self.selector = FieldSelector()
        self.page_index = 1
        self.page_size = max(1, config.default_page_size)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def is_loaded(self) -> bool:
        return self.shape is not None

    # -- loading -------------------------------------------------------

    def load(self, parsed: Any) -> List[Record]:
        """Replace the collection with the records of *parsed*.

        Raises InvalidShape without touching the current state.
        """
        items, shape = resolve_document(parsed)
        records = build_records(items, self.config.record_id_prefix)
        template = records[0].edited if records else None

        self.records = records
        self.shape = shape
        self.selector = FieldSelector(template)
        self.page_index = 1
        logger.info("Loaded %d record(s) as %s document", len(records), shape.value)
        return records

    def load_text(self, text) -> List[Record]:
        return self.load(parse_json_text(text))

    # -- record access -------------------------------------------------

    def index_of(self, record_id: str) -> int:
        for index, record in enumerate(self.records):
            if record.id == record_id:
                return index
        return -1

    def get(self, record_id: str) -> Optional[Record]:
        index = self.index_of(record_id)
        return self.records[index] if index >= 0 else None

    def editor(self) -> TreeEditor:
        return TreeEditor(self.selector.selection, self.config.discriminator_keys)

    # -- mutation ------------------------------------------------------

    def edit(self, record_id: str, new_value: JSONValue) -> bool:
        """Replace the working value of a record; unknown ids are ignored."""
        record = self.get(record_id)
        if record is None:
            logger.debug("Edit for missing record %s ignored", record_id)
            return False
        record.edited = new_value
        return True

    def set_leaf(self, record_id: str, path: FieldPath, value: Any) -> bool:
        record = self.get(record_id)
        if record is None:
            return False
        new_root = self.editor().set_leaf(record.edited, path, value)
        if new_root is record.edited:
            return False
        return self.edit(record_id, new_root)

    def delete_node(self, record_id: str, path: FieldPath) -> bool:
        """Delete the node at *path*; the root path deletes the whole record."""
        if not tuple(path):
            return self.delete(record_id)
        record = self.get(record_id)
        if record is None:
            return False
        new_root = self.editor().delete_node(record.edited, path)
        if new_root is record.edited:
            return False
        return self.edit(record_id, new_root)

    def delete(self, record_id: str) -> bool:
        index = self.index_of(record_id)
        if index < 0:
            logger.debug("Delete for missing record %s ignored", record_id)
            return False
        del self.records[index]
        self._clamp_page()
        logger.info("Deleted record %s; %d remaining", record_id, len(self.records))
        return True

    def reorder(self, source_index: int, destination_index: int) -> bool:
        """Move one record within the full, unpaginated order.

        The record is removed and reinserted at *destination_index*, which is
        clamped to the list; an out-of-range source is ignored.
        """
        count = len(self.records)
        if not 0 <= source_index < count:
            logger.debug("Reorder source %s out of range (count %d)", source_index, count)
            return False
        destination_index = min(max(0, destination_index), count - 1)
        if source_index == destination_index:
            return False
        record = self.records.pop(source_index)
        self.records.insert(destination_index, record)
        logger.info("Moved record %s from %d to %d", record.id, source_index, destination_index)
        return True

    def reorder_visible(self, source_index: int, destination_index: int) -> bool:
        """Apply a reorder intent expressed against the current window."""
        window = self.current_window()
        if not 0 <= source_index < len(window.records):
            logger.debug("Visible reorder source %s outside window", source_index)
            return False
        destination_index = min(max(0, destination_index), max(0, len(window.records) - 1))
        return self.reorder(window.start + source_index, window.start + destination_index)

    # -- selection -----------------------------------------------------

    def toggle_field(self, path: FieldPath):
        return self.selector.toggle(path)

    # -- pagination ----------------------------------------------------

    def paginate(self, page_index: Optional[int] = None, page_size: Optional[int] = None) -> PageWindow:
        """Project the records onto one page without changing stored state."""
        page_size = max(1, int(self.page_size if page_size is None else page_size))
        page_index = self.page_index if page_index is None else page_index
        page_index = clamp_page(page_index, len(self.records), page_size)
        start = (page_index - 1) * page_size
        return PageWindow(
            page_index=page_index,
            page_size=page_size,
            start=start,
            total=len(self.records),
            records=self.records[start:start + page_size],
        )

    def current_window(self) -> PageWindow:
        return self.paginate()

    def page_count(self) -> int:
        return page_count(len(self.records), self.page_size)

    def set_page(self, page_index: int) -> int:
        self.page_index = clamp_page(page_index, len(self.records), self.page_size)
        return self.page_index

    def next_page(self) -> int:
        return self.set_page(self.page_index + 1)

    def previous_page(self) -> int:
        return self.set_page(self.page_index - 1)

    def set_page_size(self, page_size: int) -> int:
        self.page_size = max(1, int(page_size))
        self._clamp_page()
        return self.page_size

    def _clamp_page(self) -> None:
        clamped = clamp_page(self.page_index, len(self.records), self.page_size)
        if clamped != self.page_index:
            logger.debug("Page index clamped from %d to %d", self.page_index, clamped)
        self.page_index = clamped

    def page_label(self) -> str:
        return f"Page {self.page_index} of {self.page_count()}"

    def summary(self) -> str:
        window = self.current_window()
        first = window.start + 1 if window.records else 0
        return f"Showing {first}-{window.end} of {window.total} items"

    # -- export --------------------------------------------------------

    def export_payload(self) -> Any:
        return export_payload(self.records, self.shape or DocumentShape.ARRAY)

    def export_json(self) -> str:
        return export_json(self.records, self.shape or DocumentShape.ARRAY, indent=self.config.export_indent)
