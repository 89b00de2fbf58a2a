"""Unit tests for envelope rule matching."""

from dataclasses import dataclass
from uuid import UUID, uuid4

import pytest

from envelope_budget.categorization import find_envelope, normalize_category, rule_matches


@dataclass
class Rule:
    envelope_id: UUID
    category: str | None = None
    merchant_pattern: str | None = None


class TestNormalizeCategory:
    @pytest.mark.parametrize(
        "label,expected",
        [
            ("FOOD_AND_DRINK", "food and drink"),
            ("  Groceries ", "groceries"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalize(self, label, expected):
        assert normalize_category(label) == expected


class TestRuleMatches:
    """Test a single rule against one transaction."""

    def test_feed_category_matches_user_label(self):
        rule = Rule(uuid4(), category="food and drink")
        assert rule_matches(rule, "FOOD_AND_DRINK", None) is True

    def test_partial_user_label_matches(self):
        """A shorter user label contained in the feed category matches."""
        rule = Rule(uuid4(), category="food")
        assert rule_matches(rule, "FOOD_AND_DRINK", None) is True

    def test_feed_category_contained_in_rule(self):
        rule = Rule(uuid4(), category="travel and transportation")
        assert rule_matches(rule, "TRAVEL", None) is True

    def test_unrelated_category(self):
        rule = Rule(uuid4(), category="groceries")
        assert rule_matches(rule, "FOOD_AND_DRINK", None) is False

    def test_missing_transaction_category_never_matches_category_rule(self):
        rule = Rule(uuid4(), category="food")
        assert rule_matches(rule, None, None) is False
        assert rule_matches(rule, "", None) is False

    def test_merchant_substring_case_insensitive(self):
        rule = Rule(uuid4(), merchant_pattern="starbucks")
        assert rule_matches(rule, None, "STARBUCKS #1234") is True

    def test_merchant_falls_back_to_description(self):
        rule = Rule(uuid4(), merchant_pattern="uber")
        assert rule_matches(rule, None, None, "UBER *TRIP 063015") is True

    def test_merchant_name_preferred_over_description(self):
        rule = Rule(uuid4(), merchant_pattern="uber")
        assert rule_matches(rule, None, "Lyft", "UBER *TRIP") is False

    def test_either_condition_is_enough(self):
        """A rule with both fields matches when only one of them does."""
        rule = Rule(uuid4(), category="shopping", merchant_pattern="starbucks")
        assert rule_matches(rule, "FOOD_AND_DRINK", "Starbucks") is True
        assert rule_matches(rule, "GENERAL_MERCHANDISE_SHOPPING", "Target") is True
        assert rule_matches(rule, "TRAVEL", "Delta") is False


class TestFindEnvelope:
    def test_first_match_wins(self):
        first, second = uuid4(), uuid4()
        rules = [Rule(first, category="food"), Rule(second, merchant_pattern="starbucks")]

        assert find_envelope(rules, "FOOD_AND_DRINK", "Starbucks") == first

    def test_later_rule_used_when_earlier_miss(self):
        first, second = uuid4(), uuid4()
        rules = [Rule(first, category="travel"), Rule(second, merchant_pattern="starbucks")]

        assert find_envelope(rules, "FOOD_AND_DRINK", "Starbucks") == second

    def test_no_match_returns_none(self):
        rules = [Rule(uuid4(), category="travel")]
        assert find_envelope(rules, "FOOD_AND_DRINK", "Starbucks") is None

    def test_no_rules(self):
        assert find_envelope([], "FOOD_AND_DRINK", "Starbucks") is None
