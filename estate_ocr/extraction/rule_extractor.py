"""Rule-based field extraction using ordered regex patterns.

Applies each field's rules in priority order against normalized OCR
text and keeps the first rule that produces a value.
"""

from dataclasses import dataclass

from estate_ocr.utils.logger import get_logger

from .patterns import DEFAULT_PATTERNS, FIELD_NAMES, FieldPatternSet

logger = get_logger(__name__)


@dataclass
class FieldMatch:
    """A field value resolved by one of its regex rules."""

    field_name: str
    value: str
    rule_index: int
    start_pos: int
    end_pos: int


class RuleExtractor:
    """Regex-based extractor with first-match-wins rule ordering.

    Args:
        patterns: Ordered rules per field. Defaults to the built-in
            real-estate label table.
    """

    def __init__(self, patterns: FieldPatternSet = DEFAULT_PATTERNS) -> None:
        self.patterns = patterns

    def extract(
        self,
        text: str,
        cased_text: str | None = None,
        fields: list[str] | None = None,
    ) -> dict[str, FieldMatch]:
        """Resolve fields from normalized text.

        Args:
            text: Normalized (lowercase) text to match against.
            cased_text: The same text before lowercasing. When its length
                matches, values are read from it to keep original casing.
            fields: Specific field names to extract. If ``None``, extracts all.

        Returns:
            Matches for the fields that resolved; unresolved fields are absent.
        """
        source = text
        if cased_text is not None and len(cased_text) == len(text):
            source = cased_text

        results: dict[str, FieldMatch] = {}
        for field_name in fields or list(FIELD_NAMES):
            for index, pattern in enumerate(self.patterns.for_field(field_name)):
                match = pattern.search(text)
                if not match:
                    continue
                start, end = match.span(1)
                # Optional group in a custom rule that did not participate
                if start < 0:
                    continue
                value = source[start:end].strip()
                if not value:
                    continue
                results[field_name] = FieldMatch(
                    field_name=field_name,
                    value=value,
                    rule_index=index,
                    start_pos=start,
                    end_pos=end,
                )
                break

        logger.debug("Rule extraction resolved %d fields", len(results))
        return results


def extract_by_pattern(
    normalized_text: str, patterns: FieldPatternSet = DEFAULT_PATTERNS
) -> dict[str, str | None]:
    """Return the first-matching rule value for every field, or ``None``."""
    matches = RuleExtractor(patterns).extract(normalized_text)
    return {
        name: matches[name].value if name in matches else None for name in FIELD_NAMES
    }
