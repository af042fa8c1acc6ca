"""
Text utility functions for PDF Highlight Search.

Provides literal case-insensitive substring search and the fenced block
formatting used for page text in search results.
"""

from typing import List, Tuple


def find_literal_spans(haystack: str, needle: str) -> List[Tuple[int, int]]:
    """
    Find every non-overlapping occurrence of needle in haystack.

    Both strings are compared as-is; callers lower-case them first for
    case-insensitive search. The needle is plain text, never a pattern.

    Args:
        haystack: Text to search.
        needle: Literal text to find. Must be non-empty.

    Returns:
        List of half-open (start, end) offsets, left to right.
    """
    spans = []
    start = 0
    while True:
        idx = haystack.find(needle, start)
        if idx == -1:
            break
        spans.append((idx, idx + len(needle)))
        start = idx + len(needle)
    return spans


def count_occurrences(text: str, query: str) -> int:
    """
    Count non-overlapping case-insensitive literal occurrences.

    Args:
        text: Page text.
        query: Non-empty query text.

    Returns:
        Number of occurrences.
    """
    return len(find_literal_spans(text.lower(), query.lower()))


def to_fenced_block(page_text: str, language: str = "text") -> str:
    """
    Wrap page text in a markdown fenced code block.

    Args:
        page_text: Raw page text.
        language: Info string placed after the opening fence.

    Returns:
        Fenced block string.
    """
    return f"```{language}\n{page_text}\n```"
