"""Tesseract OCR engine wrapper for scanned document images.

Turns an image file into plain text; layout and confidence data are
not used by the extraction stage.
"""

from pathlib import Path

import pytesseract
from PIL import Image, UnidentifiedImageError

from estate_ocr.utils.logger import get_logger

logger = get_logger(__name__)


class RecognitionError(RuntimeError):
    """Raised when no text could be recognized for an image."""


class TesseractEngine:
    """Wrapper around Tesseract OCR for document text extraction.

    Args:
        tesseract_cmd: Path to the Tesseract executable.
            If ``None``, uses the system default.
        default_lang: Default OCR language code.
    """

    def __init__(
        self,
        tesseract_cmd: str | None = None,
        default_lang: str = "eng",
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.default_lang = default_lang

    def extract_text(
        self,
        image_path: Path,
        lang: str | None = None,
        psm: int = 3,
    ) -> str:
        """Recognize the text of an image file.

        Args:
            image_path: Path to the image.
            lang: OCR language code. Defaults to the engine default.
            psm: Tesseract page segmentation mode.

        Returns:
            Recognized text with the engine's line breaks.

        Raises:
            RecognitionError: If the image cannot be read or recognized.
        """
        lang = lang or self.default_lang
        logger.info("Starting OCR for %s", image_path)

        try:
            with Image.open(image_path) as image:
                text = pytesseract.image_to_string(
                    image, lang=lang, config=f"--psm {psm}"
                )
        except (OSError, UnidentifiedImageError, pytesseract.TesseractError) as exc:
            raise RecognitionError(
                f"Text recognition failed for {image_path}: {exc}"
            ) from exc

        logger.info("Extracted %d characters of text", len(text))
        return text
