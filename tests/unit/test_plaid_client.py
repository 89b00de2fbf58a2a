"""Unit tests for the Plaid-backed feed client."""

from datetime import date
from unittest.mock import Mock

import plaid
import pytest

from envelope_budget.core.exceptions import UpstreamError
from envelope_budget.feed import PlaidFeedClient


def response(data: dict) -> Mock:
    return Mock(to_dict=Mock(return_value=data))


@pytest.fixture
def api():
    return Mock()


class TestFetchPage:
    @pytest.mark.asyncio
    async def test_first_sync_omits_cursor(self, api):
        api.transactions_sync.return_value = response(
            {"added": [], "modified": [], "removed": [], "has_more": False, "next_cursor": "c1"}
        )
        client = PlaidFeedClient(api, page_size=50)

        page = await client.fetch_page("access-sandbox-abc", None)

        request = api.transactions_sync.call_args.args[0]
        assert request.access_token == "access-sandbox-abc"
        assert request.count == 50
        assert "cursor" not in request.to_dict()
        assert page.next_cursor == "c1"

    @pytest.mark.asyncio
    async def test_passes_cursor_and_parses_records(self, api):
        api.transactions_sync.return_value = response(
            {
                "added": [
                    {
                        "transaction_id": "t1",
                        "amount": 4.5,
                        "date": date(2024, 3, 1),
                        "name": "Coffee",
                        "merchant_name": "Starbucks",
                        "personal_finance_category": {"primary": "FOOD_AND_DRINK"},
                        "pending": False,
                    }
                ],
                "modified": [],
                "removed": [{"transaction_id": "t0"}],
                "has_more": True,
                "next_cursor": "c2",
            }
        )
        client = PlaidFeedClient(api)

        page = await client.fetch_page("access-sandbox-abc", "c1")

        assert api.transactions_sync.call_args.args[0].cursor == "c1"
        assert page.added[0].category == "FOOD_AND_DRINK"
        assert page.removed == ["t0"]
        assert page.has_more is True

    @pytest.mark.asyncio
    async def test_api_error_becomes_upstream_error(self, api):
        api.transactions_sync.side_effect = plaid.ApiException(status=400, reason="ITEM_LOGIN_REQUIRED")
        client = PlaidFeedClient(api)

        with pytest.raises(UpstreamError) as exc_info:
            await client.fetch_page("access-sandbox-abc", "c1")

        assert exc_info.value.error_code == "BANK_002"
        assert exc_info.value.http_status == 502


class TestLinkHelpers:
    @pytest.mark.asyncio
    async def test_exchange_public_token(self, api):
        api.item_public_token_exchange.return_value = response(
            {"access_token": "access-sandbox-xyz", "item_id": "item-9"}
        )
        client = PlaidFeedClient(api)

        assert await client.exchange_public_token("public-sandbox-1") == ("access-sandbox-xyz", "item-9")

    @pytest.mark.asyncio
    async def test_link_token_failure(self, api):
        api.link_token_create.side_effect = plaid.ApiException(status=500)
        client = PlaidFeedClient(api)

        with pytest.raises(UpstreamError) as exc_info:
            await client.create_link_token("user-1")

        assert exc_info.value.error_code == "BANK_003"

    def test_is_sandbox(self, api):
        assert PlaidFeedClient(api, environment="sandbox").is_sandbox is True
        assert PlaidFeedClient(api, environment="production").is_sandbox is False
