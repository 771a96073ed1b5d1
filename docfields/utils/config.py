"""Configuration management for the field extraction engine.

Loads and validates YAML configuration with defaults for the
extraction rules that accept tuning.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_KNOWN_VENDORS: list[str] = [
    "ABC.LTD",
    "ABC Corporation",
    "XYZ Pvt Ltd",
]


class ExtractionConfig(BaseModel):
    """Configuration for category-specific field extraction."""

    known_vendors: list[str] = Field(
        default_factory=lambda: list(DEFAULT_KNOWN_VENDORS)
    )
    min_vendor_length: int = Field(default=3, ge=1)


class AppConfig(BaseModel):
    """Top-level application configuration."""

    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        return AppConfig(**raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()
