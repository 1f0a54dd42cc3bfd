"""OCR text cleanup prior to pattern matching.

Collapses whitespace and repairs common Tesseract confusions so that
label patterns can match regardless of layout and casing.
"""

import re

_WHITESPACE_RE = re.compile(r"\s+")


def clean(raw_text: str) -> str:
    """Collapse whitespace and fix punctuation without changing case.

    Args:
        raw_text: Text as returned by the OCR engine.

    Returns:
        Single-line text with semicolons read as colons and pipes as ``I``.
    """
    text = _WHITESPACE_RE.sub(" ", raw_text)
    text = text.replace(";", ":")
    return text.replace("|", "I")


def normalize(raw_text: str) -> str:
    """Return the canonical lowercase form used for pattern matching.

    Line boundaries do not survive, so line-oriented heuristics must work
    on the raw text instead.
    """
    return clean(raw_text).lower()
