"""
Utility module providing shared helper functions.

Contains file operations and text processing utilities used across
the application. Depends only on the core module.
"""

from .file_utils import (
    resolve_pdf_path,
    read_document_bytes,
    get_document_version
)
from .text_utils import (
    find_literal_spans,
    count_occurrences,
    to_fenced_block
)

__all__ = [
    "resolve_pdf_path",
    "read_document_bytes",
    "get_document_version",
    "find_literal_spans",
    "count_occurrences",
    "to_fenced_block"
]
