"""
Configuration loader for PDF Highlight Search.

Loads settings from config.json and provides typed access via dataclasses.
Supports singleton pattern for global access and runtime reload capability.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError
from .logger import DEFAULT_LOG_FORMAT


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    pdf_base_path: Path
    logs_directory: Path


@dataclass
class EngineConfig:
    """Configuration for the PDF decoding engine."""
    text_backend: str
    fallback_backend: str
    line_tolerance: float


@dataclass
class RenderingConfig:
    """
    Configuration for page rendering.

    The highlight scale is derived from these two values so that match
    rectangles overlay a page rendered at the same DPI.
    """
    dpi: int
    pdf_units_per_inch: int

    @property
    def scale(self) -> float:
        """Pixels per PDF unit at the configured DPI."""
        return self.dpi / self.pdf_units_per_inch


@dataclass
class SearchConfig:
    """Configuration for search functionality."""
    parallelism: int
    max_query_length: int


@dataclass
class CacheConfig:
    """Configuration for the page text cache."""
    enabled: bool
    max_entries: int


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str
    format: str
    max_file_size_mb: int
    backup_count: int
    library_level: str = "WARNING"


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Provides singleton access via get_config() function.
    """
    paths: PathsConfig
    engine: EngineConfig
    rendering: RenderingConfig
    search: SearchConfig
    cache: CacheConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        project_root = config_path.resolve().parent.parent

        return cls._parse_config(data, project_root)

    @classmethod
    def _parse_config(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        paths = PathsConfig(
            pdf_base_path=cls._resolve_path(paths_data.get("pdf_base_path", "data"), project_root),
            logs_directory=cls._resolve_path(paths_data.get("logs_directory", "output/logs"), project_root)
        )

        engine_data = data.get("engine", {})
        engine = EngineConfig(
            text_backend=engine_data.get("text_backend", "pypdf"),
            fallback_backend=engine_data.get("fallback_backend", "pdfplumber"),
            line_tolerance=float(engine_data.get("line_tolerance", 3.0))
        )

        render_data = data.get("rendering", {})
        rendering = RenderingConfig(
            dpi=render_data.get("dpi", 180),
            pdf_units_per_inch=render_data.get("pdf_units_per_inch", 72)
        )
        if rendering.dpi <= 0 or rendering.pdf_units_per_inch <= 0:
            raise ConfigurationError(
                "Rendering dpi and pdf_units_per_inch must be positive",
                {"dpi": rendering.dpi, "pdf_units_per_inch": rendering.pdf_units_per_inch}
            )

        search_data = data.get("search", {})
        search = SearchConfig(
            parallelism=search_data.get("parallelism", 0),
            max_query_length=search_data.get("max_query_length", 512)
        )

        cache_data = data.get("cache", {})
        cache = CacheConfig(
            enabled=cache_data.get("enabled", True),
            max_entries=cache_data.get("max_entries", 2048)
        )

        log_data = data.get("logging", {})
        logging_cfg = LoggingConfig(
            level=log_data.get("level", "INFO"),
            format=log_data.get("format", DEFAULT_LOG_FORMAT),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5),
            library_level=log_data.get("library_level", "WARNING")
        )

        return cls(
            paths=paths,
            engine=engine,
            rendering=rendering,
            search=search,
            cache=cache,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _resolve_path(path_str: str, project_root: Path) -> Path:
        """Resolve a path string, making relative paths absolute."""
        path = Path(path_str)
        if path.is_absolute():
            return path
        return project_root / path


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    searches upward from current directory.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()
        _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Path:
    """Search upward from current directory to find config/config.json."""
    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents"
    )


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)
