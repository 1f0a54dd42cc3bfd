"""Field extraction pipeline for real-estate OCR text.

Normalizes the text, resolves fields with the ordered regex rules and
falls back to keyword line scanning on the raw text for anything the
rules missed. Unresolved fields keep the ``Not found`` sentinel.
"""

import time
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from estate_ocr.utils.config import ExtractionConfig
from estate_ocr.utils.logger import get_logger

from .line_scanner import scan_value
from .normalizer import clean
from .patterns import (
    DEFAULT_KEYWORDS,
    DEFAULT_PATTERNS,
    FIELD_NAMES,
    FieldKeywordSet,
    FieldPatternSet,
    load_rule_sets,
)
from .rule_extractor import RuleExtractor

logger = get_logger(__name__)

NOT_FOUND = "Not found"


class ExtractedRecord(BaseModel):
    """Structured fields extracted from one document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    buyer_name: str = Field(default=NOT_FOUND, alias="buyerName")
    seller_name: str = Field(default=NOT_FOUND, alias="sellerName")
    property_address: str = Field(default=NOT_FOUND, alias="propertyAddress")
    key_dates: str = Field(default=NOT_FOUND, alias="keyDates")
    offer_price: str = Field(default=NOT_FOUND, alias="offerPrice")
    source_file: str = Field(default="", alias="sourceFile")

    def to_dict(self) -> dict[str, str]:
        """Serialize with the camelCase keys used in result files."""
        return self.model_dump(by_alias=True)


class DebugSink(Protocol):
    """Destination for raw OCR text kept for troubleshooting."""

    def write(self, text: str, key: str) -> None: ...


class FieldExtractor:
    """Layered extractor combining regex rules and line scanning.

    Args:
        patterns: Ordered regex rules per field.
        keywords: Fallback keywords per field.
        debug_sink: Optional sink receiving each raw text before extraction.
    """

    def __init__(
        self,
        patterns: FieldPatternSet = DEFAULT_PATTERNS,
        keywords: FieldKeywordSet = DEFAULT_KEYWORDS,
        debug_sink: DebugSink | None = None,
    ) -> None:
        self.rule_extractor = RuleExtractor(patterns)
        self.keywords = keywords
        self.debug_sink = debug_sink

    @classmethod
    def from_config(
        cls, config: ExtractionConfig, debug_sink: DebugSink | None = None
    ) -> "FieldExtractor":
        """Build an extractor from the rule overrides in configuration.

        Raises:
            ValueError: If the configured rules are invalid.
        """
        patterns, keywords = load_rule_sets(config.labels, config.keywords)
        return cls(patterns, keywords, debug_sink)

    def extract(self, raw_text: str, source_file: str = "") -> ExtractedRecord:
        """Extract all fields from raw OCR text.

        Args:
            raw_text: Text as returned by the OCR engine.
            source_file: Name of the originating document.

        Returns:
            Record with every field resolved or set to ``Not found``.
        """
        values = dict.fromkeys(FIELD_NAMES, NOT_FOUND)

        self._write_debug(raw_text)

        cased = clean(raw_text)
        normalized = cased.lower()
        matches = self.rule_extractor.extract(normalized, cased)
        for name, match in matches.items():
            values[name] = match.value
            logger.debug("%s resolved by rule %d", name, match.rule_index)

        for name in FIELD_NAMES:
            if name in matches:
                continue
            candidate = scan_value(raw_text, self.keywords.for_field(name))
            if candidate:
                values[name] = candidate
                logger.debug("%s resolved by line scan", name)

        missing = [name for name in FIELD_NAMES if values[name] == NOT_FOUND]
        if missing:
            logger.info("Fields not found: %s", ", ".join(missing))

        return ExtractedRecord(**values, source_file=source_file)

    def _write_debug(self, raw_text: str) -> None:
        """Persist raw text to the debug sink without affecting extraction."""
        if self.debug_sink is None:
            return
        try:
            self.debug_sink.write(raw_text, str(time.time_ns()))
        except Exception:
            logger.warning("Debug text write failed, continuing extraction")
