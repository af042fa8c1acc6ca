"""
Core module providing foundational components.

This module contains the configuration loader, centralized logging setup,
and custom exception hierarchy. It has no internal dependencies.
"""

from .config_loader import get_config, reload_config, Config, RenderingConfig
from .logger import get_logger
from .exceptions import (
    PDFHighlightError,
    ConfigurationError,
    InvalidArgument,
    DocumentNotFound,
    OutOfRange,
    DecodeError,
    AggregateScanFailure
)

__all__ = [
    "get_config",
    "reload_config",
    "Config",
    "RenderingConfig",
    "get_logger",
    "PDFHighlightError",
    "ConfigurationError",
    "InvalidArgument",
    "DocumentNotFound",
    "OutOfRange",
    "DecodeError",
    "AggregateScanFailure"
]
