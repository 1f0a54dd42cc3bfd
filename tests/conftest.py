"""Shared test fixtures for the real-estate OCR test suite."""

from pathlib import Path

import pytest
from PIL import Image

from estate_ocr.utils.config import AppConfig, DebugConfig


@pytest.fixture
def complete_text() -> str:
    """OCR text with every field on its own labelled line."""
    return (
        "Buyer Name: Jane Doe\n"
        "Seller Name: John Smith\n"
        "Property Address: 123 Main St\n"
        "Closing Date: 2024-01-15\n"
        "Offer Price: $450,000"
    )


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def config_no_debug() -> AppConfig:
    """Default configuration with raw text dumps disabled."""
    return AppConfig(debug=DebugConfig(enabled=False))


@pytest.fixture
def image_path(tmp_path: Path) -> Path:
    """Write a minimal blank PNG and return its path."""
    path = tmp_path / "deed.png"
    Image.new("RGB", (200, 100), "white").save(path, format="PNG")
    return path
