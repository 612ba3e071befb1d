from __future__ import annotations

from typing import List, Tuple, Union

Segment = Union[str, int]
FieldPath = Tuple[Segment, ...]

ROOT_PATH: FieldPath = ()
ROOT_LABEL = '(root)'
EMPTY_KEY_LABEL = "''"


def is_index(segment) -> bool:
    """True for array index segments (``bool`` is an ``int`` subclass but never an index)."""
    return isinstance(segment, int) and not isinstance(segment, bool)


def escape_path_segment(segment: Segment) -> str:
    """Escape a single segment for dot-path display.

    - Indices are written as plain digits.
    - Dots are escaped as '\\.' so keys like 'gpt-3.5-turbo' remain one segment.
    - Backslashes are escaped as '\\\\' to preserve round-tripping.
    - Keys made only of digits (and the literal '(root)') get a leading
      backslash so they do not read back as an index or as the root.
    - The empty key is written as "''"; a literal "''" key is escaped.
    """
    if is_index(segment):
        return str(segment)
    if not isinstance(segment, str):
        segment = str(segment)
    if segment == '':
        return EMPTY_KEY_LABEL
    escaped = segment.replace('\\', '\\\\').replace('.', '\\.')
    if (escaped.isascii() and escaped.isdigit()) or escaped in (ROOT_LABEL, EMPTY_KEY_LABEL):
        escaped = '\\' + escaped
    return escaped


def unescape_path_segment(segment: str) -> str:
    if segment is None:
        return ''
    out: List[str] = []
    i = 0
    while i < len(segment):
        ch = segment[i]
        if ch == '\\' and i + 1 < len(segment):
            out.append(segment[i + 1])
            i += 2
        else:
            out.append(ch)
            i += 1
    return ''.join(out)


def _to_segment(raw: str, escaped: bool) -> Segment:
    if not escaped and raw.isascii() and raw.isdigit():
        return int(raw)
    if not escaped and raw == EMPTY_KEY_LABEL:
        return ''
    return unescape_path_segment(raw)


def _append_segment(parts: List[Segment], raw: str, escaped: bool) -> None:
    # Empty text between separators is skipped; the empty key is spelled "''".
    if raw:
        parts.append(_to_segment(raw, escaped))


def split_path(path: str) -> FieldPath:
    """Split a dot path on unescaped '.' into a structural path.

    Unescaped all-digit segments become integer indices; everything else is
    an object key. ``'(root)'`` and the empty string are the root path.
    """
    if path is None:
        return ROOT_PATH
    if not isinstance(path, str):
        path = str(path)
    if path in ('', ROOT_LABEL):
        return ROOT_PATH

    parts: List[Segment] = []
    buf: List[str] = []
    escaping = False
    escaped = False

    for ch in path:
        if escaping:
            # Keep the escape pair so unescape_path_segment can process it.
            buf.append('\\')
            buf.append(ch)
            escaping = False
            continue

        if ch == '\\':
            escaping = True
            escaped = True
            continue
        if ch == '.':
            _append_segment(parts, ''.join(buf), escaped)
            buf = []
            escaped = False
            continue
        buf.append(ch)

    if escaping:
        # Trailing backslash; treat as literal.
        buf.append('\\')

    _append_segment(parts, ''.join(buf), escaped)
    return tuple(parts)


def format_path(path: FieldPath) -> str:
    """Render a structural path for display; the root renders as '(root)'."""
    if not path:
        return ROOT_LABEL
    return '.'.join(escape_path_segment(segment) for segment in path)


def parse_path(text: str) -> FieldPath:
    return split_path(text)


def path_label(path: FieldPath) -> str:
    """Last segment as text, or 'Root' for the root path."""
    if not path:
        return 'Root'
    return str(path[-1])


def child_path(path: FieldPath, segment: Segment) -> FieldPath:
    return path + (segment,)
