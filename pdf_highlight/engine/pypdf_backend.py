"""
pypdf-based decode session.

Fast plain-text extraction suitable for most standard PDF files.
Handles encryption detection and empty password decryption.
"""

import io

from pypdf import PdfReader

from ..core import get_logger, DecodeError, OutOfRange

logger = get_logger(__name__)


class PyPDFBackend:
    """
    Decode session over an in-memory PDF using the pypdf library.

    Each instance owns its own PdfReader and stream; instances are never
    shared between threads.
    """

    name = "pypdf"

    def __init__(self, data: bytes):
        """
        Open a reader over the document bytes.

        Args:
            data: Complete PDF file contents.

        Raises:
            DecodeError: If the bytes cannot be parsed or decrypted.
        """
        try:
            self._stream = io.BytesIO(data)
            self._reader = PdfReader(self._stream)

            if self._reader.is_encrypted:
                try:
                    self._reader.decrypt("")
                except Exception as e:
                    raise DecodeError(f"PDF is encrypted and cannot be decrypted: {e}")

            self._page_count = len(self._reader.pages)

        except DecodeError:
            raise
        except Exception as e:
            raise DecodeError(f"pypdf could not open document: {e}")

        logger.debug(f"pypdf opened document with {self._page_count} pages")

    def page_count(self) -> int:
        return self._page_count

    def extract_page_text(self, page_num: int) -> str:
        """
        Extract plain text from a specific page.

        Args:
            page_num: Page number (1-indexed).

        Returns:
            Extracted text from the page.

        Raises:
            OutOfRange: If page_num is outside the document.
            DecodeError: If the page cannot be extracted.
        """
        if page_num < 1 or page_num > self._page_count:
            raise OutOfRange(page_num, self._page_count)

        try:
            # Convert 1-indexed to 0-indexed
            page = self._reader.pages[page_num - 1]
            return page.extract_text() or ""

        except Exception as e:
            raise DecodeError(
                f"pypdf failed to extract page {page_num}: {e}",
                page_number=page_num
            )

    def close(self) -> None:
        self._stream.close()
