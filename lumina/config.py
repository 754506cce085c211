"""Configuration loader for the Lumina library browser."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError
from .presenter import PLACEHOLDER_IMAGE
from .storage import SAVED_BOOKS_KEY


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Lumina Library"
    version: str = "1.0.0"


class CatalogConfig(BaseModel):
    """Where the catalog comes from and how it is paged."""

    # None means the bundled lumina/data/books.json
    data_file: Optional[str] = None
    items_per_page: int = Field(default=6, gt=0)


class StorageConfig(BaseModel):
    """Local persistence of saved books."""

    path: str = "./data/local_storage.json"
    saved_books_key: str = SAVED_BOOKS_KEY


class PresentationConfig(BaseModel):
    placeholder_image: str = PLACEHOLDER_IMAGE


class LuminaConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    presentation: PresentationConfig = Field(default_factory=PresentationConfig)
    log_level: str = "INFO"


def load_config(config_path: Union[str, Path] = "config.yaml") -> LuminaConfig:
    """Load configuration from a YAML file and environment variables.

    Parameters
    ----------
    config_path : str | Path
        Path to the YAML configuration file. A missing file means
        defaults.

    Returns
    -------
    LuminaConfig
        Fully populated configuration.

    Raises
    ------
    ConfigError
        If the file is not valid YAML, does not match the schema, or an
        environment override has the wrong type.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        try:
            with open(config_file) as f:
                yaml_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_file}: {exc}") from exc
        if not isinstance(yaml_data, dict):
            raise ConfigError(f"{config_file} must contain a mapping")

    try:
        config = LuminaConfig(**yaml_data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {config_file}: {exc}") from exc

    # Environment overrides
    if os.getenv("LUMINA_CATALOG_FILE"):
        config.catalog.data_file = os.environ["LUMINA_CATALOG_FILE"]
    if os.getenv("LUMINA_STORAGE_PATH"):
        config.storage.path = os.environ["LUMINA_STORAGE_PATH"]
    if os.getenv("LUMINA_LOG_LEVEL"):
        config.log_level = os.environ["LUMINA_LOG_LEVEL"].upper()
    if os.getenv("LUMINA_ITEMS_PER_PAGE"):
        raw = os.environ["LUMINA_ITEMS_PER_PAGE"]
        try:
            items_per_page = int(raw)
        except ValueError as exc:
            raise ConfigError(f"LUMINA_ITEMS_PER_PAGE must be an integer, got {raw!r}") from exc
        if items_per_page < 1:
            raise ConfigError("LUMINA_ITEMS_PER_PAGE must be positive")
        config.catalog.items_per_page = items_per_page

    return config


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
