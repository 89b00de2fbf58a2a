"""Database models."""
from envelope_budget.models.user import User
from envelope_budget.models.identity import Identity
from envelope_budget.models.envelope import Envelope
from envelope_budget.models.envelope_rule import EnvelopeRule
from envelope_budget.models.transaction import Transaction

__all__ = ["User", "Identity", "Envelope", "EnvelopeRule", "Transaction"]
