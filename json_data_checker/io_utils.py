from __future__ import annotations

import json
import math

from .errors import ParseFailure


def _reject_constant(name):
    raise ParseFailure(f"Invalid JSON: {name} is not a JSON value.")


def _finite_float(text):
    value = float(text)
    if not math.isfinite(value):
        raise ParseFailure(f"Invalid JSON: number {text} is out of range.")
    return value


def parse_json_text(content) -> object:
    """Parse UTF-8 JSON text, raising ParseFailure for anything that is not JSON.

    ``NaN``, ``Infinity`` and numbers that overflow a float are rejected.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise ParseFailure(f"Input is not valid UTF-8: {exc}") from exc
    if content is None or not content.strip():
        raise ParseFailure("No JSON input provided.")
    try:
        return json.loads(content, parse_constant=_reject_constant, parse_float=_finite_float)
    except json.JSONDecodeError as exc:
        raise ParseFailure(f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc


def read_json_content(file_obj):
    """Read JSON content from an uploaded file or file path."""
    if file_obj is None:
        raise ParseFailure("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        return parse_json_text(file_obj.read())

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    try:
        with open(path, 'rb') as f:
            content = f.read()
    except OSError as exc:
        raise ParseFailure(f"Could not read {path}: {exc}") from exc
    return parse_json_text(content)
