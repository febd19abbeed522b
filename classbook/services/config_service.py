"""
Configuration service for lesson settings.

Provides a single source of truth for paging and database settings.
Values come from classbook/config/lesson_config.json; the database URL
can be overridden with the CLASSBOOK_DATABASE_URL environment variable.
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, Optional

DATABASE_URL_ENV = "CLASSBOOK_DATABASE_URL"
DEFAULT_PAGE_SIZE = 20


class ConfigService:
    """Service for loading and providing lesson configuration."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize the configuration service.

        Args:
            config_path: Path to configuration JSON file.
                        Defaults to classbook/config/lesson_config.json
        """
        if config_path is None:
            package_dir = Path(__file__).parent.parent
            config_path = package_dir / "config" / "lesson_config.json"

        self.config_path = config_path
        self._config = None

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from JSON file.

        Returns:
            Dictionary containing all configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            json.JSONDecodeError: If config file is invalid JSON
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            return json.load(f)

    @property
    def config(self) -> Dict[str, Any]:
        """Get the full configuration (cached)."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def get_page_size(self) -> int:
        """Get the fixed number of lessons per page.

        Raises:
            ValueError: If the configured page size is not a positive integer
        """
        page_size = self.config.get("pageSize", DEFAULT_PAGE_SIZE)
        if not isinstance(page_size, int) or page_size < 1:
            raise ValueError(f"Invalid pageSize in {self.config_path}: {page_size!r}")
        return page_size

    def get_database_url(self) -> str:
        """Get the SQLAlchemy database URL.

        CLASSBOOK_DATABASE_URL takes precedence over the config file.
        """
        env_url = os.environ.get(DATABASE_URL_ENV)
        if env_url:
            return env_url
        return self.config.get("databaseUrl", "sqlite:///classbook.db")

    def get_echo_sql(self) -> bool:
        """Whether SQLAlchemy should log emitted SQL."""
        return bool(self.config.get("echoSql", False))


# Global instance for easy import
_config_service = None

def get_config_service() -> ConfigService:
    """Get the global configuration service instance.

    Returns:
        ConfigService instance
    """
    global _config_service
    if _config_service is None:
        _config_service = ConfigService()
    return _config_service
