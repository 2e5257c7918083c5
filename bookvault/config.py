"""Configuration loader for the Book Vault application."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from bookvault.models.settings import Settings


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Book Vault"
    version: str = "1.0.0"


class StorageConfig(BaseModel):
    """Storage paths configuration."""

    sqlite_path: str = "./db/vault.db"
    export_dir: str = "./data/exports"


class HighlightConfig(BaseModel):
    """Markers wrapped around search matches."""

    open_tag: str = "<mark>"
    close_tag: str = "</mark>"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    highlight: HighlightConfig = Field(default_factory=HighlightConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Used until the user saves settings of their own
    defaults: Settings = Field(default_factory=Settings)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Environment overrides
    db_path = os.getenv("BOOKVAULT_DB_PATH")
    if db_path:
        config.storage.sqlite_path = db_path
    log_level = os.getenv("BOOKVAULT_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    return config
