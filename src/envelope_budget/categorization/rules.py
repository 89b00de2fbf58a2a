"""Rule matching for envelope auto-assignment.

A rule supplies a category, a merchant pattern, or both. Either condition alone
satisfies the rule; a rule carrying both is not an AND. Rules are evaluated in
the order given and the first match wins; there is no scoring.

Category matching absorbs vocabulary differences between the feed's taxonomy
("FOOD_AND_DRINK") and user labels ("food and drink", "food"): both sides are
lower-cased, underscores become spaces, and either string containing the other
is a match.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID


class MatchableRule(Protocol):
    envelope_id: UUID
    category: str | None
    merchant_pattern: str | None


def normalize_category(label: str | None) -> str:
    """Lower-case a category label and turn underscores into spaces."""
    return (label or "").strip().lower().replace("_", " ")


def _category_matches(rule_category: str | None, txn_category: str | None) -> bool:
    rule_norm = normalize_category(rule_category)
    txn_norm = normalize_category(txn_category)
    if not rule_norm or not txn_norm:
        return False
    return rule_norm in txn_norm or txn_norm in rule_norm


def _merchant_matches(pattern: str | None, merchant_text: str | None) -> bool:
    if not pattern or not merchant_text:
        return False
    return pattern.lower() in merchant_text.lower()


def rule_matches(
    rule: MatchableRule,
    category: str | None,
    merchant_name: str | None,
    description: str | None = None,
) -> bool:
    """Check one rule against a transaction.

    Args:
        rule: Rule with ``category`` and/or ``merchant_pattern``.
        category: Transaction's category label as received.
        merchant_name: Merchant name, if the feed supplied one.
        description: Fallback text for the merchant condition.
    """
    if _category_matches(rule.category, category):
        return True
    merchant_text = merchant_name or description
    return _merchant_matches(rule.merchant_pattern, merchant_text)


def find_envelope(
    rules: Iterable[MatchableRule],
    category: str | None,
    merchant_name: str | None,
    description: str | None = None,
) -> UUID | None:
    """Return the envelope id of the first matching rule, or None."""
    for rule in rules:
        if rule_matches(rule, category, merchant_name, description):
            return rule.envelope_id
    return None
