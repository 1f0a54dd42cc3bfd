"""Keyword line scanning fallback for fields no rule resolved.

Works on the raw OCR text so that line structure and original casing
survive, reading values from ``Label: Value`` shaped lines.
"""

from collections.abc import Iterable


def scan_lines(raw_text: str, keywords: Iterable[str]) -> list[str]:
    """Return every line mentioning one of the keywords, in order.

    Args:
        raw_text: Un-normalized OCR text.
        keywords: Lowercase keywords; matched as substrings.

    Returns:
        Relevant lines with their original casing.
    """
    keywords = tuple(keywords)
    if not keywords:
        return []
    return [
        line
        for line in raw_text.split("\n")
        if any(keyword in line.lower() for keyword in keywords)
    ]


def value_after_colon(lines: Iterable[str]) -> str | None:
    """Take the text after the first colon of the first line that has one.

    Lines whose remainder is blank are skipped.
    """
    for line in lines:
        parts = line.split(":", 1)
        if len(parts) < 2:
            continue
        candidate = parts[1].strip()
        if candidate:
            return candidate
    return None


def scan_value(raw_text: str, keywords: Iterable[str]) -> str | None:
    """Find a fallback value for a field from its keyword lines."""
    return value_after_colon(scan_lines(raw_text, keywords))
