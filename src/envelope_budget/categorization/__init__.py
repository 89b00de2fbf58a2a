"""Envelope auto-assignment.

Transactions arriving from the bank feed are matched against the owner's
envelope rules: a category label, a merchant substring, or both. Matching is
local and deterministic so sync never depends on a second network call.
"""

from .rules import find_envelope, normalize_category, rule_matches

__all__ = ["find_envelope", "normalize_category", "rule_matches"]
