"""Configuration management for the real-estate OCR system.

Loads and validates YAML configuration with sensible defaults
for OCR, batch input/output, debug output, and extraction rules.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class OCRConfig(BaseModel):
    """Configuration for Tesseract OCR engine."""

    tesseract_cmd: str | None = None
    default_lang: str = "eng"
    psm: int = 3


class BatchConfig(BaseModel):
    """Input image directory and result file locations."""

    image_dir: str = "./images"
    output_path: str = "./extracted_data.json"


class DebugConfig(BaseModel):
    """Configuration for raw OCR text dumps."""

    enabled: bool = True
    directory: str = "./debug"


class ExtractionConfig(BaseModel):
    """Per-field overrides of the built-in label patterns and keywords.

    Fields left out keep their defaults.
    """

    labels: dict[str, list[str]] = Field(default_factory=dict)
    keywords: dict[str, list[str]] = Field(default_factory=dict)


class AppConfig(BaseModel):
    """Top-level application configuration."""

    ocr: OCRConfig = Field(default_factory=OCRConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)
    debug: DebugConfig = Field(default_factory=DebugConfig)
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
