"""
Concurrent page scanner.

Splits a document into one unit of work per page, extracts and searches
each page on a fixed-size thread pool with an independent decode session
per unit, and returns page-ordered hits. Any failing page fails the whole
scan.
"""

import os
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable, Optional, Tuple

from ..core import get_logger, AggregateScanFailure, InvalidArgument
from ..engine import open_document
from ..utils import count_occurrences, to_fenced_block
from .models import PageHit, ScanOutcome, ScanTask
from .page_cache import PageTextCache

logger = get_logger(__name__)


def resolve_parallelism(configured: Optional[int]) -> int:
    """
    Resolve a configured worker count.

    Args:
        configured: Requested workers; None or <= 0 means one per logical core.

    Returns:
        Worker count >= 1.
    """
    if configured is None or configured <= 0:
        return os.cpu_count() or 1
    return configured


def _scan_page(
    task: ScanTask,
    query: str,
    opener: Callable,
    cache: Optional[PageTextCache],
    document_key: Optional[Tuple[str, str]]
) -> Optional[PageHit]:
    """Extract and search one page in its own decode session."""
    key = None
    text = None

    if cache is not None and document_key is not None:
        key = cache.key(document_key[0], document_key[1], task.page_number)
        text = cache.get(key)

    if text is None:
        with opener(task.document) as session:
            text = session.extract_page_text(task.page_number)
        if key is not None:
            cache.put(key, text)

    occurrences = count_occurrences(text, query)
    logger.debug(f"Page {task.page_number}: {occurrences} occurrences")

    if occurrences == 0:
        return None

    return PageHit(
        page_number=task.page_number,
        page_markdown=to_fenced_block(text),
        occurrences=occurrences
    )


def scan_document(
    document: bytes,
    query: str,
    parallelism: int,
    opener: Callable = open_document,
    cache: Optional[PageTextCache] = None,
    document_key: Optional[Tuple[str, str]] = None
) -> ScanOutcome:
    """
    Search every page of a document concurrently.

    Args:
        document: Complete PDF bytes; shared read-only by all workers.
        query: Non-empty literal query, matched case-insensitively.
        parallelism: Thread pool size, >= 1.
        opener: Callable returning a new decode session (context manager)
            for the bytes. Called once for the page count and once per page.
        cache: Optional page text cache.
        document_key: (identity, version) of the document; required for the
            cache to be used.

    Returns:
        ScanOutcome with hits sorted by ascending page number.

    Raises:
        InvalidArgument: If query is empty or parallelism < 1.
        DecodeError: If the document cannot be opened to count pages.
        AggregateScanFailure: If any page fails; no partial result is kept.
    """
    if not query:
        raise InvalidArgument("Query must not be empty")
    if parallelism < 1:
        raise InvalidArgument(
            f"Parallelism must be at least 1, got {parallelism}",
            {"parallelism": parallelism}
        )

    with opener(document) as session:
        total_pages = session.page_count()

    tasks = [ScanTask(page_number=page, document=document) for page in range(1, total_pages + 1)]
    if not tasks:
        return ScanOutcome(hits=(), total_pages=0)

    logger.debug(f"Scanning {total_pages} pages with {parallelism} workers")

    executor = ThreadPoolExecutor(max_workers=parallelism, thread_name_prefix="page-scan")
    try:
        futures = {
            executor.submit(_scan_page, task, query, opener, cache, document_key): task.page_number
            for task in tasks
        }
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)

        failures = sorted(
            ((futures[future], future.exception()) for future in done if future.exception() is not None),
            key=lambda failure: failure[0]
        )
        if failures:
            page_number, cause = failures[0]
            logger.error(f"Scan aborted on page {page_number}: {cause}")
            raise AggregateScanFailure(page_number, cause) from cause

        hits = [future.result() for future in futures]

    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    ordered = sorted((hit for hit in hits if hit is not None), key=lambda hit: hit.page_number)
    return ScanOutcome(hits=tuple(ordered), total_pages=total_pages)
