"""
CLI script to render one PDF page to a PNG file.

Usage:
    python scripts/render_page.py report.pdf 3 page3.png
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pdf_highlight.core import get_config, ConfigurationError, PDFHighlightError
from pdf_highlight.core.config_loader import reload_config
from pdf_highlight.search import SearchService


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a PDF page to PNG at the configured DPI"
    )

    parser.add_argument("file_name", help="PDF file name under the configured base path")
    parser.add_argument("page", type=int, help="Page number (1-indexed)")
    parser.add_argument("output", help="Destination PNG path")

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    return parser.parse_args()


def main():
    """Main entry point for the render CLI."""
    args = parse_args()

    if args.config:
        reload_config(Path(args.config))

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    try:
        image = SearchService(config).page_image(args.file_name, args.page)
    except PDFHighlightError as e:
        print(f"Render failed: {e.message}")
        sys.exit(1)

    Path(args.output).write_bytes(image.png)
    print(f"Wrote {image.width}x{image.height} PNG at {image.dpi} DPI to {args.output}")
    sys.exit(0)


if __name__ == "__main__":
    main()
