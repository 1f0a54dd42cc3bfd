"""Field rule tables for real-estate document extraction.

Holds the ordered label patterns and the fallback keyword lists for each
extracted field as immutable configuration objects, so that different
document templates can run side by side with their own rule sets.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

FIELD_NAMES: tuple[str, ...] = (
    "buyer_name",
    "seller_name",
    "property_address",
    "key_dates",
    "offer_price",
)

# Fields whose value may be preceded by a currency sign but never contain one
_AMOUNT_FIELDS = frozenset({"offer_price"})

# Label alternatives per field, most specific phrasing first
_DEFAULT_LABELS: dict[str, list[str]] = {
    "buyer_name": [
        r"buyer\s*name",
        r"name\s*of\s*buyer",
        r"purchaser",
    ],
    "seller_name": [
        r"seller\s*name",
        r"name\s*of\s*seller",
        r"vendor",
    ],
    "property_address": [
        r"property\s*to\s*be\s*sold\s*address",
        r"property\s*address",
        r"address\s*of\s*property",
        r"subject\s*property",
    ],
    "key_dates": [
        r"key\s*dates",
        r"important\s*dates",
        r"closing\s*date",
        r"settlement\s*date",
    ],
    "offer_price": [
        r"(?:buy|offer|purchase)\s*price\s*\$?",
        r"price",
        r"amount",
    ],
}

_DEFAULT_CATCH_ALL: dict[str, list[str]] = {
    "offer_price": [r"\$\s*([0-9,.]+)"],
}

_DEFAULT_KEYWORDS: dict[str, list[str]] = {
    "buyer_name": ["buyer", "purchaser"],
    "seller_name": ["seller", "vendor"],
    "property_address": ["property", "address", "location"],
    "key_dates": ["date", "closing", "settlement"],
    "offer_price": ["price", "amount", "offer", "$"],
}


def _check_fields(names: Sequence[str]) -> None:
    unknown = sorted(set(names) - set(FIELD_NAMES))
    if unknown:
        raise ValueError(f"Unknown extraction fields: {', '.join(unknown)}")


def build_label_rules(
    labels: Mapping[str, Sequence[str]],
    catch_all: Mapping[str, Sequence[str]] | None = None,
) -> dict[str, list[str]]:
    """Expand label phrasings into full single-group extraction rules.

    Each value capture is lazy and ends where any known label followed by
    a colon begins, or at the end of the text, since normalized text no
    longer has line breaks to stop on.

    Args:
        labels: Ordered label regexes per field.
        catch_all: Complete rules appended after the labelled ones.

    Returns:
        Ordered rule regexes per field.
    """
    every_label = [label for field_labels in labels.values() for label in field_labels]
    alternatives = "|".join(f"(?:{label})" for label in every_label)
    # Matches nothing when no labels are configured
    next_label = rf"\s*\b(?:{alternatives})\s*:" if every_label else r"(?!)"

    rules: dict[str, list[str]] = {}
    for field_name, field_labels in labels.items():
        if field_name in _AMOUNT_FIELDS:
            value = rf"\$?\s*([^\n$]+?)(?={next_label}|\s*\$|\s*$)"
        else:
            value = rf"([^\n]+?)(?={next_label}|\s*$)"
        rules[field_name] = [
            rf"{label}\s*:(?!{next_label})\s*{value}" for label in field_labels
        ]

    for field_name, extra in (catch_all or {}).items():
        rules.setdefault(field_name, []).extend(extra)
    return rules


@dataclass(frozen=True)
class FieldPatternSet:
    """Ordered, compiled extraction rules for each field.

    Earlier rules take priority; every rule has exactly one capture
    group holding the field value.
    """

    rules: Mapping[str, tuple[re.Pattern[str], ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _check_fields(list(self.rules))
        for field_name, patterns in self.rules.items():
            for pattern in patterns:
                if pattern.groups != 1:
                    raise ValueError(
                        f"Rule for {field_name} must have exactly one capture "
                        f"group: {pattern.pattern!r}"
                    )
        frozen = {name: tuple(patterns) for name, patterns in self.rules.items()}
        object.__setattr__(self, "rules", MappingProxyType(frozen))

    @classmethod
    def from_mapping(cls, patterns: Mapping[str, Sequence[str]]) -> "FieldPatternSet":
        """Compile rule regexes into a case-insensitive pattern set."""
        try:
            compiled = {
                name: tuple(re.compile(p, re.IGNORECASE) for p in field_patterns)
                for name, field_patterns in patterns.items()
            }
        except re.error as exc:
            raise ValueError(f"Invalid extraction rule: {exc}") from exc
        return cls(compiled)

    def for_field(self, field_name: str) -> tuple[re.Pattern[str], ...]:
        return self.rules.get(field_name, ())


@dataclass(frozen=True)
class FieldKeywordSet:
    """Lowercase keywords that mark a raw text line as relevant to a field."""

    keywords: Mapping[str, frozenset[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _check_fields(list(self.keywords))
        frozen = {
            name: frozenset(k.lower() for k in words if k)
            for name, words in self.keywords.items()
        }
        object.__setattr__(self, "keywords", MappingProxyType(frozen))

    @classmethod
    def from_mapping(cls, keywords: Mapping[str, Sequence[str]]) -> "FieldKeywordSet":
        return cls({name: frozenset(words) for name, words in keywords.items()})

    def for_field(self, field_name: str) -> frozenset[str]:
        return self.keywords.get(field_name, frozenset())


def load_rule_sets(
    labels: Mapping[str, Sequence[str]] | None = None,
    keywords: Mapping[str, Sequence[str]] | None = None,
) -> tuple[FieldPatternSet, FieldKeywordSet]:
    """Build pattern and keyword sets from defaults plus per-field overrides.

    Args:
        labels: Label regexes replacing the defaults of the given fields.
        keywords: Keyword lists replacing the defaults of the given fields.

    Returns:
        Pattern set and keyword set ready for the extraction engine.

    Raises:
        ValueError: If an override names an unknown field or a rule is invalid.
    """
    merged_labels = dict(_DEFAULT_LABELS)
    merged_labels.update(labels or {})
    merged_keywords = dict(_DEFAULT_KEYWORDS)
    merged_keywords.update(keywords or {})

    patterns = FieldPatternSet.from_mapping(
        build_label_rules(merged_labels, _DEFAULT_CATCH_ALL)
    )
    return patterns, FieldKeywordSet.from_mapping(merged_keywords)


DEFAULT_PATTERNS, DEFAULT_KEYWORDS = load_rule_sets()
