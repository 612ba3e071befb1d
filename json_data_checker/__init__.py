"""Core logic for the JSON Data Checker.

The Gradio UI lives in `app.py`. This package contains the pieces it drives:
- parse JSON input into records (`io_utils`, `records`)
- address nodes by structural path (`paths`, `accessors`)
- select which leaves to expose (`selection`)
- edit and delete nodes without mutating shared data (`editor`)
- order, paginate and export the collection (`store`, `exporter`)
"""
