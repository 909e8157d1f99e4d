"""
Configuration models and loader.
"""

import os
from pathlib import Path
from typing import Literal, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, model_validator

from catalog.cache import CacheStore, FileCacheStore, MemoryCacheStore
from catalog.exceptions import ConfigError

CONFIG_VERSION = "1.0"

# Sample bundle shipped next to the package
BUNDLED_DATA_DIR = Path(__file__).resolve().parent / "data"


class DataSettings(BaseModel):
    """Location of the bundled catalog documents."""

    albums_path: Path = BUNDLED_DATA_DIR / "albums.json"
    artists_path: Path = BUNDLED_DATA_DIR / "artists.json"


class CacheSettings(BaseModel):
    """Cache backend settings."""

    backend: Literal["file", "memory"] = "file"
    directory: Path = Path(".catalog-cache")
    scope: str = "music-catalog"
    max_entries: int = Field(default=100, gt=0)  # memory backend only

    @model_validator(mode="after")
    def apply_environment(self) -> "CacheSettings":
        """CATALOG_CACHE_DIR overrides the configured directory."""
        env_dir = os.getenv("CATALOG_CACHE_DIR", "").strip()
        if env_dir:
            self.directory = Path(env_dir)
        return self

    def create_store(self) -> CacheStore:
        if self.backend == "memory":
            return MemoryCacheStore(max_entries=self.max_entries)
        return FileCacheStore(self.directory, scope=self.scope)


class FilterSettings(BaseModel):
    """Filter and controller settings."""

    debounce_ms: int = Field(default=300, ge=0)
    default_price_range: Tuple[float, float] = (0.0, 100.0)
    related_albums_limit: int = Field(default=4, ge=0)

    @model_validator(mode="after")
    def check_price_range(self) -> "FilterSettings":
        low, high = self.default_price_range
        if low < 0 or low > high:
            raise ValueError(f"Invalid default_price_range: {self.default_price_range}")
        return self

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


class CatalogConfig(BaseModel):
    """Main configuration model."""

    version: Literal["1.0"] = CONFIG_VERSION
    data: DataSettings = Field(default_factory=DataSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    filters: FilterSettings = Field(default_factory=FilterSettings)
    log_level: str = "INFO"

    @classmethod
    def default(cls) -> "CatalogConfig":
        """Configuration pointing at the bundled sample data."""
        config = cls()
        config.data = _resolve_data_paths(config.data, base_dir=None)
        return config

    @classmethod
    def from_yaml(cls, path: str) -> "CatalogConfig":
        """
        Load and validate configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            CatalogConfig instance

        Raises:
            ConfigError: If file not found or invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML file: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        # YAML reads an unquoted 1.0 as a float
        version = data.get("version", CONFIG_VERSION)
        if str(version) != CONFIG_VERSION:
            raise ConfigError(f"Invalid version: {version}. Expected {CONFIG_VERSION}")
        data["version"] = CONFIG_VERSION

        try:
            config = cls(**data)
        except Exception as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

        config.data = _resolve_data_paths(config.data, base_dir=config_path.resolve().parent)
        return config


def _resolve_data_paths(data: DataSettings, base_dir: Optional[Path]) -> DataSettings:
    """Anchor relative document paths at CATALOG_DATA_DIR or the config directory."""
    env_dir = os.getenv("CATALOG_DATA_DIR", "").strip()
    anchor = Path(env_dir) if env_dir else base_dir

    def resolve(path: Path) -> Path:
        if env_dir:
            return anchor / path.name
        if anchor is not None and not path.is_absolute():
            return anchor / path
        return path

    return DataSettings(albums_path=resolve(data.albums_path), artists_path=resolve(data.artists_path))


def load_config(config_path: Optional[str] = None) -> CatalogConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to configuration file, or None for defaults

    Returns:
        CatalogConfig instance
    """
    if config_path is None:
        return CatalogConfig.default()
    return CatalogConfig.from_yaml(config_path)
