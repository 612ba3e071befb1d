from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, List, Optional

from .records import DocumentShape, Record, is_single_document

logger = logging.getLogger(__name__)


def export_payload(records: List[Record], shape: Optional[DocumentShape] = DocumentShape.ARRAY) -> Any:
    """Edited values in collection order.

    A single-document load exports its one record as-is so the output has the
    shape that was loaded, unless edits left it in a shape that would no
    longer load as a single document.
    """
    if shape is not None and shape.single_document and len(records) == 1:
        if is_single_document(records[0].edited):
            return records[0].edited
    return [record.edited for record in records]


def export_json(records: List[Record], shape: Optional[DocumentShape] = DocumentShape.ARRAY, indent: int = 2) -> str:
    """Pretty-printed JSON; each object keeps its own key order.

    Raises ValueError for NaN or infinite numbers, which JSON cannot carry.
    """
    return json.dumps(export_payload(records, shape), indent=indent, ensure_ascii=False, allow_nan=False)


def write_export_file(content: str, file_name: Optional[str] = None, default_name: str = 'edited_data.json') -> str:
    """Write exported JSON to the temp directory and return its path."""
    output_name = (file_name or '').strip() or default_name
    if not output_name.lower().endswith('.json'):
        output_name += '.json'

    path = os.path.join(tempfile.gettempdir(), os.path.basename(output_name))
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
    logger.info("Exported %d bytes to %s", len(content), path)
    return path
