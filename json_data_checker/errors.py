from __future__ import annotations


class ParseFailure(ValueError):
    """Input text is not syntactically valid JSON."""


class InvalidShape(ValueError):
    """Valid JSON that is not one of the accepted collection shapes."""


class StalePathReference(LookupError):
    """A path no longer resolves inside the tree it was applied to.

    Raised by the accessors and swallowed by the editor, which turns the
    mutation into a no-op.
    """

    def __init__(self, path, depth: int):
        self.path = tuple(path)
        self.depth = depth
        super().__init__(f"path {self.path!r} does not resolve at segment {depth}")
