"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, generated PDFs, an in-memory fake engine,
and mock configurations to ensure tests are isolated and safe.
"""

import json
import pytest
import tempfile
import shutil
import threading
from pathlib import Path
from typing import Dict, Generator, List, Sequence, Tuple

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from pdf_highlight.core.exceptions import DecodeError, OutOfRange
from pdf_highlight.engine.models import GlyphPosition


def _escape_pdf_string(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: Sequence[Sequence[Tuple[float, float, str]]]) -> bytes:
    """
    Build a valid PDF with Helvetica 12pt text.

    Args:
        pages: One entry per page, each a list of (x, y, text) lines where
            y is measured up from the bottom of a 612x792 page.

    Returns:
        PDF bytes with a correct cross-reference table.
    """
    page_count = len(pages)
    kids = " ".join(f"{4 + 2 * i} 0 R" for i in range(page_count))

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode("ascii"),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    for i, lines in enumerate(pages):
        stream = "".join(
            f"BT /F1 12 Tf {x} {y} Td ({_escape_pdf_string(text)}) Tj ET\n"
            for x, y, text in lines
        ).encode("latin-1")
        objects.append(
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Contents {5 + 2 * i} 0 R /Resources << /Font << /F1 3 0 R >> >> >>".encode("ascii")
        )
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_position = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += (
        b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n"
        % (len(objects) + 1, xref_position)
    )

    return bytes(out)


class FakeSession:
    """In-memory decode session serving fixed page texts."""

    def __init__(self, engine: "FakeEngine"):
        self.engine = engine
        self.closed = False

    def page_count(self) -> int:
        return len(self.engine.pages)

    def extract_page_text(self, page_num: int) -> str:
        if page_num < 1 or page_num > len(self.engine.pages):
            raise OutOfRange(page_num, len(self.engine.pages))
        with self.engine.lock:
            self.engine.extracted.append(page_num)
        if page_num in self.engine.failing_pages:
            raise DecodeError(f"Unreadable page {page_num}", page_number=page_num)
        return self.engine.pages[page_num - 1]

    def extract_page_glyph_positions(self, page_num: int) -> List[GlyphPosition]:
        return list(self.engine.glyphs.get(page_num, []))

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class FakeEngine:
    """
    Callable standing in for open_document.

    Records every session opened so tests can check that each page gets
    its own session.
    """

    def __init__(
        self,
        pages: Sequence[str],
        failing_pages: Sequence[int] = (),
        glyphs: Dict[int, List[GlyphPosition]] = None
    ):
        self.pages = list(pages)
        self.failing_pages = set(failing_pages)
        self.glyphs = glyphs or {}
        self.sessions: List[FakeSession] = []
        self.extracted: List[int] = []
        self.lock = threading.Lock()

    def __call__(self, data: bytes, **kwargs) -> FakeSession:
        session = FakeSession(self)
        with self.lock:
            self.sessions.append(session)
        return session


def glyph_line(text: str, x: float = 100.0, y: float = 100.0,
               width: float = 10.0, height: float = 12.0) -> List[GlyphPosition]:
    """Lay out text as equally wide glyphs on one baseline."""
    return [
        GlyphPosition(text=char, x=x + i * width, y=y, width=width, height=height)
        for i, char in enumerate(text)
    ]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="pdf_highlight_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_config(temp_dir: Path) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Args:
        temp_dir: Temporary directory fixture.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir()

    data_dir = temp_dir / "data"
    data_dir.mkdir()

    logs_dir = temp_dir / "output" / "logs"
    logs_dir.mkdir(parents=True)

    config_data = {
        "paths": {
            "pdf_base_path": str(data_dir),
            "logs_directory": str(logs_dir)
        },
        "engine": {
            "text_backend": "pypdf",
            "fallback_backend": "pdfplumber",
            "line_tolerance": 3.0
        },
        "rendering": {
            "dpi": 180,
            "pdf_units_per_inch": 72
        },
        "search": {
            "parallelism": 2,
            "max_query_length": 64
        },
        "cache": {
            "enabled": True,
            "max_entries": 16
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


@pytest.fixture
def hello_pdf_bytes() -> bytes:
    """One page reading "Hello World" on a single line."""
    return build_pdf([[(100, 700, "Hello World")]])


@pytest.fixture
def three_page_pdf_bytes() -> bytes:
    """Three pages; only page 2 mentions "needle", twice."""
    return build_pdf([
        [(72, 700, "Nothing to see on the first page")],
        [(72, 700, "A needle in a haystack"), (72, 680, "and another Needle below")],
        [(72, 700, "The last page is empty of it")],
    ])


@pytest.fixture
def two_line_pdf_bytes() -> bytes:
    """One page with "Hello" and "World" on consecutive lines."""
    return build_pdf([[(100, 700, "Hello"), (100, 680, "World")]])


@pytest.fixture
def data_dir(temp_config: Path) -> Path:
    """The pdf_base_path of temp_config, populated with sample PDFs."""
    data = temp_config.parent.parent / "data"
    (data / "hello.pdf").write_bytes(build_pdf([[(100, 700, "Hello World")]]))
    (data / "three.pdf").write_bytes(build_pdf([
        [(72, 700, "Nothing to see on the first page")],
        [(72, 700, "A needle in a haystack"), (72, 680, "and another Needle below")],
        [(72, 700, "The last page is empty of it")],
    ]))
    (data / "broken.pdf").write_bytes(b"Not a valid PDF")
    return data


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from pdf_highlight.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """
    Reset the logger initialization flag between tests.
    """
    from pdf_highlight.core import logger
    logger._logger_initialized = False
    yield
    logger._logger_initialized = False


@pytest.fixture
def configured(temp_config, reset_config_singleton):
    """
    Load temp_config as the global configuration.

    Returns:
        The loaded Config instance.
    """
    from pdf_highlight.core.config_loader import get_config
    return get_config(temp_config)
