"""
CLI script to search a PDF for a query on every page.

Usage:
    python scripts/run_search.py report.pdf "landing gear"
    python scripts/run_search.py report.pdf "landing gear" --parallelism 4
    python scripts/run_search.py report.pdf "landing gear" --json
    python scripts/run_search.py report.pdf "landing gear" --config path/to/config.json
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pdf_highlight.core import get_config, ConfigurationError, PDFHighlightError
from pdf_highlight.core.config_loader import reload_config
from pdf_highlight.search import SearchService


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Search every page of a PDF for a literal query"
    )

    parser.add_argument("file_name", help="PDF file name under the configured base path")
    parser.add_argument("query", help="Literal text to search for (case-insensitive)")

    parser.add_argument(
        "--parallelism",
        type=int,
        default=None,
        help="Worker threads (0 = one per core, default from config)"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    return parser.parse_args()


def main():
    """Main entry point for the search CLI."""
    args = parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        reload_config(config_path)

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    service = SearchService(config)

    try:
        result = service.search(args.file_name, args.query, parallelism=args.parallelism)
    except PDFHighlightError as e:
        print(f"Search failed: {e.message}")
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        sys.exit(0)

    print("=" * 60)
    print(f"File:          {result.file_name}")
    print(f"Query:         {result.query}")
    print(f"Total pages:   {result.total_pages}")
    print(f"Matched pages: {result.matched_pages}")
    print(f"Load / scan:   {result.doc_load_ms}ms / {result.scan_ms}ms")
    print(f"Parallelism:   {result.parallelism}")
    print("=" * 60)

    for hit in result.pages:
        print(f"  Page {hit.page_number:>4}: {hit.occurrences} occurrence(s)")

    sys.exit(0)


if __name__ == "__main__":
    main()
