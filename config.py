"""Configuration for the catalog viewer.

All settings are loaded from environment variables with sensible defaults.

Environment Variables:
    CATALOG_SOURCE: URL or file path of the article JSON document
    CATALOG_TIMEOUT: Seconds to wait when fetching the catalog over HTTP
    HOST / PORT: Address the web interface listens on
    LOG_DIR: Directory for log files
    LOG_LEVEL: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    LOG_BACKUP_COUNT: Number of rotated log files to keep
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _env_int(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Raises:
        ValueError: If value is set but cannot be parsed as integer
    """
    val = os.environ.get(key)
    if not val:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"Invalid integer value for {key}: '{val}'")


def _env_float(key: str, default: float) -> float:
    val = os.environ.get(key)
    if not val:
        return default
    try:
        return float(val)
    except ValueError:
        raise ValueError(f"Invalid float value for {key}: '{val}'")


@dataclass
class Config:
    """Application configuration loaded from environment variables.

    Example:
        >>> config = Config.load()
        >>> if error := config.validate():
        ...     print(f"Config error: {error}")
    """

    catalog_source: str = "data/articles.json"  # CATALOG_SOURCE
    catalog_timeout: float = 10.0  # CATALOG_TIMEOUT

    host: str = "127.0.0.1"  # HOST
    port: int = 8000  # PORT

    log_dir: Path = field(default_factory=lambda: Path("logs"))  # LOG_DIR
    log_level: str = "INFO"  # LOG_LEVEL
    log_backup_count: int = 1  # LOG_BACKUP_COUNT - keep one day of logs

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            catalog_source=_env("CATALOG_SOURCE", "data/articles.json"),
            catalog_timeout=_env_float("CATALOG_TIMEOUT", 10.0),
            host=_env("HOST", "127.0.0.1"),
            port=_env_int("PORT", 8000),
            log_dir=Path(_env("LOG_DIR", "logs")),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            log_backup_count=_env_int("LOG_BACKUP_COUNT", 1),
        )

    def validate(self) -> str | None:
        """Return an error message if the configuration is unusable, None if valid."""
        if not self.catalog_source:
            return "CATALOG_SOURCE must not be empty"
        if self.catalog_timeout <= 0:
            return "CATALOG_TIMEOUT must be positive"
        if not 0 < self.port < 65536:
            return f"Invalid PORT {self.port}"
        if self.log_level not in LOG_LEVELS:
            return f"Invalid LOG_LEVEL '{self.log_level}' - must be one of {', '.join(LOG_LEVELS)}"
        if self.log_backup_count < 0:
            return "LOG_BACKUP_COUNT must be non-negative"
        return None
