"""
CLI script to print highlight rectangles for a query on one page.

Rectangles are in the pixel space of a page rendered at the configured DPI
(see scripts/render_page.py).

Usage:
    python scripts/run_page_matches.py report.pdf "landing gear" 3
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
        description="Compute highlight rectangles for a query on one PDF page"
    )

    parser.add_argument("file_name", help="PDF file name under the configured base path")
    parser.add_argument("query", help="Literal text to locate (case-insensitive)")
    parser.add_argument("page", type=int, help="Page number (1-indexed)")

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    return parser.parse_args()


def main():
    """Main entry point for the page matches CLI."""
    args = parse_args()

    if args.config:
        reload_config(Path(args.config))

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    try:
        matches = SearchService(config).page_matches(args.file_name, args.query, args.page)
    except PDFHighlightError as e:
        print(f"Locating matches failed: {e.message}")
        sys.exit(1)

    print(json.dumps(matches.to_dict(), indent=2, ensure_ascii=False))
    sys.exit(0)


if __name__ == "__main__":
    main()
