"""Tests for the field rule tables."""

import re

import pytest

from estate_ocr.extraction.patterns import (
    DEFAULT_KEYWORDS,
    DEFAULT_PATTERNS,
    FIELD_NAMES,
    FieldKeywordSet,
    FieldPatternSet,
    build_label_rules,
    load_rule_sets,
)


class TestDefaults:
    """Tests for the built-in rule tables."""

    def test_every_field_has_rules(self) -> None:
        for name in FIELD_NAMES:
            assert DEFAULT_PATTERNS.for_field(name)

    def test_every_field_has_keywords(self) -> None:
        for name in FIELD_NAMES:
            assert DEFAULT_KEYWORDS.for_field(name)

    def test_price_catch_all_is_last(self) -> None:
        rules = DEFAULT_PATTERNS.for_field("offer_price")
        assert rules[-1].pattern == r"\$\s*([0-9,.]+)"

    def test_rules_are_case_insensitive(self) -> None:
        for rule in DEFAULT_PATTERNS.for_field("buyer_name"):
            assert rule.flags & re.IGNORECASE

    def test_seller_keywords(self) -> None:
        assert DEFAULT_KEYWORDS.for_field("seller_name") == {"seller", "vendor"}


class TestFieldPatternSet:
    """Tests for pattern set construction and validation."""

    def test_from_mapping_compiles(self) -> None:
        patterns = FieldPatternSet.from_mapping({"buyer_name": [r"buyer:\s*(\w+)"]})
        assert len(patterns.for_field("buyer_name")) == 1

    def test_missing_field_has_no_rules(self) -> None:
        patterns = FieldPatternSet.from_mapping({"buyer_name": [r"buyer:\s*(\w+)"]})
        assert patterns.for_field("seller_name") == ()

    def test_rejects_zero_groups(self) -> None:
        with pytest.raises(ValueError, match="exactly one capture group"):
            FieldPatternSet.from_mapping({"buyer_name": [r"buyer:\s*\w+"]})

    def test_rejects_two_groups(self) -> None:
        with pytest.raises(ValueError, match="exactly one capture group"):
            FieldPatternSet.from_mapping({"buyer_name": [r"(buyer):\s*(\w+)"]})

    def test_rejects_unknown_field(self) -> None:
        with pytest.raises(ValueError, match="Unknown extraction fields"):
            FieldPatternSet.from_mapping({"agent_name": [r"agent:\s*(\w+)"]})

    def test_rejects_invalid_regex(self) -> None:
        with pytest.raises(ValueError, match="Invalid extraction rule"):
            FieldPatternSet.from_mapping({"buyer_name": [r"buyer:(\w+"]})

    def test_rules_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_PATTERNS.rules["buyer_name"] = ()


class TestFieldKeywordSet:
    """Tests for keyword set construction."""

    def test_keywords_lowercased(self) -> None:
        keywords = FieldKeywordSet.from_mapping({"seller_name": ["Grantor"]})
        assert keywords.for_field("seller_name") == {"grantor"}

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValueError):
            FieldKeywordSet.from_mapping({"notary": ["notary"]})


class TestBuildLabelRules:
    """Tests for expanding labels into rules."""

    def test_value_stops_at_next_label(self) -> None:
        rules = build_label_rules({"buyer_name": ["buyer"], "seller_name": ["seller"]})
        match = re.search(rules["buyer_name"][0], "buyer: jane doe seller: john")
        assert match is not None
        assert match.group(1) == "jane doe"

    def test_value_runs_to_end(self) -> None:
        rules = build_label_rules({"buyer_name": ["buyer"]})
        match = re.search(rules["buyer_name"][0], "buyer: jane doe")
        assert match is not None
        assert match.group(1) == "jane doe"

    def test_catch_all_appended(self) -> None:
        rules = build_label_rules({"offer_price": ["price"]}, {"offer_price": ["x(y)"]})
        assert rules["offer_price"][-1] == "x(y)"


class TestLoadRuleSets:
    """Tests for applying configuration overrides."""

    def test_label_override_replaces_field(self) -> None:
        patterns, _ = load_rule_sets(labels={"buyer_name": ["grantee"]})
        assert len(patterns.for_field("buyer_name")) == 1
        assert len(patterns.for_field("seller_name")) == 3

    def test_keyword_override(self) -> None:
        _, keywords = load_rule_sets(keywords={"seller_name": ["grantor"]})
        assert keywords.for_field("seller_name") == {"grantor"}
        assert keywords.for_field("buyer_name") == {"buyer", "purchaser"}

    def test_unknown_override_rejected(self) -> None:
        with pytest.raises(ValueError):
            load_rule_sets(labels={"agent": ["agent"]})
