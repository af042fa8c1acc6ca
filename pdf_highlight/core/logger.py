"""
Logging setup for PDF Highlight Search.

Page scans run on a worker pool, so the default format carries the thread
name (``page-scan_N``) next to the logger name. The PDF libraries log every
parsed object at DEBUG; their loggers are held at a separate level so that
DEBUG output for this package stays readable.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable


_logger_initialized = False

LOG_FILE_NAME = "pdf_highlight.log"

DEFAULT_LOG_FORMAT = "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s"

# pdfplumber parses through pdfminer; Pillow logs PNG chunk handling
PDF_LIBRARY_LOGGERS = ("pdfminer", "pdfplumber", "pypdf", "PIL")


def _level(name: str, default: int = logging.INFO) -> int:
    return getattr(logging, str(name).upper(), default)


def quiet_pdf_libraries(level: str = "WARNING", names: Iterable[str] = PDF_LIBRARY_LOGGERS) -> None:
    """
    Set the level of the third-party PDF library loggers.

    Args:
        level: Level name applied to every library logger.
        names: Logger names to adjust.
    """
    for name in names:
        logging.getLogger(name).setLevel(_level(level, logging.WARNING))


def setup_logging(
    log_level: str = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    library_level: str = "WARNING"
) -> None:
    """
    Configure the root logger once per process.

    Args:
        log_level: Level for this package's loggers.
        log_format: Format string shared by console and file output.
        logs_directory: Directory for pdf_highlight.log; None disables the file.
        max_file_size_mb: Size at which the log file rotates.
        backup_count: Rotated files to keep.
        library_level: Level for pdfminer, pdfplumber, pypdf and PIL.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(_level(log_level))

    formatter = logging.Formatter(log_format)
    handlers = [logging.StreamHandler(sys.stdout)]

    if logs_directory:
        logs_directory = Path(logs_directory)
        logs_directory.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            logs_directory / LOG_FILE_NAME,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8"
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    quiet_pdf_libraries(library_level)

    _logger_initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger, configuring logging from config.json on first use.

    When no configuration can be loaded, console-only defaults are used.
    """
    if not _logger_initialized:
        try:
            from .config_loader import get_config
            config = get_config()
            setup_logging(
                log_level=config.logging.level,
                log_format=config.logging.format,
                logs_directory=config.paths.logs_directory,
                max_file_size_mb=config.logging.max_file_size_mb,
                backup_count=config.logging.backup_count,
                library_level=config.logging.library_level
            )
        except Exception:
            setup_logging()

    return logging.getLogger(name)
