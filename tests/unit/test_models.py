"""Unit tests for model mapping options."""

import pytest

from envelope_budget.models import Envelope, User


class TestCollectionRelationships:
    @pytest.mark.parametrize(
        "attribute",
        [User.envelopes, User.transactions, Envelope.rules],
    )
    def test_collections_never_load_implicitly(self, attribute):
        """Collections are only read through repository queries."""
        assert attribute.property.lazy == "raise"
        assert attribute.property.passive_deletes == "all"
