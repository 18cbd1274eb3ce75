"""
Configuration management for the heritage recommendation service.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass

_LOG = logging.getLogger(__name__)


@dataclass
class AppConfig:
    """Application configuration settings."""
    host: str
    port: int
    debug: bool


@dataclass
class RecommendationConfig:
    """Recommendation engine settings."""
    limit: int
    max_catalog_size: Optional[int]
    null_origin_matches: bool


@dataclass
class CatalogConfig:
    """Catalog source settings."""
    api_base_url: str
    timeout: float
    static_catalog_path: str


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "heritage_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        # Start with default config
        self._config = self._get_default_config()

        # Load base config from file
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                self._merge_config(file_config)
            except json.JSONDecodeError as exc:
                # Keep default config if file is invalid
                _LOG.warning("Ignoring invalid config file %s: %s", self.config_file, exc)

        # Override with environment variables
        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "app": {
                "host": "0.0.0.0",
                "port": 22582,
                "debug": False
            },
            "recommendations": {
                "limit": 6,
                "max_catalog_size": 5000,
                "null_origin_matches": False
            },
            "catalog": {
                "api_base_url": "",
                "timeout": 10.0,
                "static_catalog_path": ""
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = _env_bool(os.getenv("APP_DEBUG"))

        # Recommendation settings
        if os.getenv("RECOMMENDATION_LIMIT"):
            self._config["recommendations"]["limit"] = int(os.getenv("RECOMMENDATION_LIMIT"))

        if os.getenv("MAX_CATALOG_SIZE"):
            self._config["recommendations"]["max_catalog_size"] = int(os.getenv("MAX_CATALOG_SIZE"))

        if os.getenv("NULL_ORIGIN_MATCHES"):
            self._config["recommendations"]["null_origin_matches"] = _env_bool(
                os.getenv("NULL_ORIGIN_MATCHES")
            )

        # Catalog settings
        if os.getenv("CONTENT_API_BASE_URL"):
            self._config["catalog"]["api_base_url"] = os.getenv("CONTENT_API_BASE_URL")

        if os.getenv("CONTENT_API_TIMEOUT"):
            self._config["catalog"]["timeout"] = float(os.getenv("CONTENT_API_TIMEOUT"))

        if os.getenv("STATIC_CATALOG_PATH"):
            self._config["catalog"]["static_catalog_path"] = os.getenv("STATIC_CATALOG_PATH")

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"]
        )

    def get_recommendation_config(self) -> RecommendationConfig:
        """Get recommendation engine configuration."""
        rec_config = self._config["recommendations"]
        max_size = rec_config.get("max_catalog_size")
        return RecommendationConfig(
            limit=rec_config["limit"],
            # 0 or null disables the bound
            max_catalog_size=max_size if max_size else None,
            null_origin_matches=rec_config["null_origin_matches"]
        )

    def get_catalog_config(self) -> CatalogConfig:
        """Get catalog source configuration."""
        catalog_config = self._config["catalog"]
        return CatalogConfig(
            api_base_url=catalog_config["api_base_url"],
            timeout=catalog_config["timeout"],
            static_catalog_path=catalog_config["static_catalog_path"]
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def get_recommendation_config() -> RecommendationConfig:
    """Get recommendation engine configuration."""
    return config_manager.get_recommendation_config()


def get_catalog_config() -> CatalogConfig:
    """Get catalog source configuration."""
    return config_manager.get_catalog_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
