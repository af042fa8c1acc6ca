"""
File utility functions for PDF Highlight Search.

Provides safe resolution of client-supplied PDF names under the base
directory, byte loading, and a content version for cache keys.
"""

import hashlib
from pathlib import Path
from typing import Union

from ..core import InvalidArgument, DocumentNotFound


def resolve_pdf_path(base_path: Union[str, Path], file_name: str) -> Path:
    """
    Resolve a bare file name under the base directory.

    Args:
        base_path: Directory holding the PDFs.
        file_name: Client-supplied file name, without directories.

    Returns:
        Path to an existing file.

    Raises:
        InvalidArgument: If the name is empty or contains path components.
        DocumentNotFound: If no such file exists.
    """
    if not file_name or not file_name.strip():
        raise InvalidArgument("File name must not be empty")

    if ".." in file_name or "/" in file_name or "\\" in file_name:
        raise InvalidArgument("Invalid file name.", {"file_name": file_name})

    filepath = Path(base_path) / file_name
    if not filepath.is_file():
        raise DocumentNotFound(
            f"PDF not found: {filepath.resolve()}",
            filepath=str(filepath)
        )

    return filepath


def read_document_bytes(filepath: Union[str, Path]) -> bytes:
    """
    Read a whole document into an immutable bytes buffer.

    Args:
        filepath: Path to the PDF file.

    Returns:
        File contents.
    """
    return Path(filepath).read_bytes()


def get_document_version(data: bytes) -> str:
    """
    Compute a content version from the bytes that will be scanned.

    The version labels the loaded buffer, not the file on disk.

    Args:
        data: Complete document contents.

    Returns:
        Hexadecimal MD5 digest of the contents.
    """
    return hashlib.md5(data).hexdigest()
