"""File-backed sink for raw OCR text dumps."""

from pathlib import Path

from estate_ocr.utils.logger import get_logger

logger = get_logger(__name__)


class FileDebugSink:
    """Writes each raw text blob to ``raw_text_<key>.txt``.

    Args:
        directory: Output directory, created on first write.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def write(self, text: str, key: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"raw_text_{key}.txt"
        path.write_text(text, encoding="utf-8")
        logger.debug("Saved raw OCR text to %s", path)
