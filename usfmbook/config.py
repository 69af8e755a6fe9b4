"""Configuration loader for the USFM book parser."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "USFM Book Parser"
    version: str = "1.0.0"


class ParsingConfig(BaseModel):
    """Source discovery and decoding configuration."""

    file_extension: str = ".usfm"
    fallback_encoding: str = "cp1252"
    max_workers: int = 1


class OutputConfig(BaseModel):
    """JSON export configuration."""

    output_dir: str = "./output"
    indent: int = 2


class StorageConfig(BaseModel):
    """Storage paths configuration."""

    sqlite_path: str = "./db/books.db"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    format: str = "%(levelname)s: %(message)s"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    parsing: ParsingConfig = Field(default_factory=ParsingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Directory holding the .usfm sources
    source_dir: str | None = None


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

    # Environment wins over the file
    source_dir = os.getenv("USFM_SOURCE_DIR")
    if source_dir:
        config.source_dir = source_dir
    log_level = os.getenv("USFM_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    return config
