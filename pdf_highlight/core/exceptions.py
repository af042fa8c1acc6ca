"""
Custom exception hierarchy for PDF Highlight Search.

Provides specific exception types for the failure modes of searching and
locating matches: invalid arguments, out-of-range pages, undecodable
documents, and whole-document scan failures.
"""


class PDFHighlightError(Exception):
    """Base exception for all PDF Highlight Search errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PDFHighlightError):
    """Raised when configuration is invalid or missing."""
    pass


class InvalidArgument(PDFHighlightError):
    """Raised for an empty query, non-positive scale or parallelism, or an unsafe file name."""
    pass


class DocumentNotFound(InvalidArgument):
    """Raised when a requested PDF does not exist under the base path."""

    def __init__(self, message: str, filepath: str = None, details: dict = None):
        super().__init__(message, details)
        self.filepath = filepath


class OutOfRange(PDFHighlightError):
    """Raised when a page number lies outside [1, page_count]."""

    def __init__(self, page_number: int, page_count: int, details: dict = None):
        """
        Initialize out-of-range error.

        Args:
            page_number: The requested 1-based page number.
            page_count: Number of pages in the document.
            details: Additional context.
        """
        super().__init__(
            f"Page {page_number} out of range (document has {page_count} pages)",
            details
        )
        self.page_number = page_number
        self.page_count = page_count


class DecodeError(PDFHighlightError):
    """Raised when the PDF engine cannot open, parse, or extract a page."""

    def __init__(self, message: str, page_number: int = None, details: dict = None):
        """
        Initialize decode error.

        Args:
            message: Error description.
            page_number: Page being extracted, when the failure is page-specific.
            details: Additional context.
        """
        super().__init__(message, details)
        self.page_number = page_number


class AggregateScanFailure(PDFHighlightError):
    """
    Raised when any page of a concurrent scan fails.

    Carries the page number and underlying cause of the first observed
    failure. No partial result accompanies it.
    """

    def __init__(self, page_number: int, cause: BaseException, details: dict = None):
        super().__init__(
            f"Scan failed on page {page_number}: {cause}",
            details
        )
        self.page_number = page_number
        self.cause = cause
