"""Bank feed client.

``FeedClient`` is the one call the sync core needs. ``PlaidFeedClient``
implements it (plus the Link helpers used by the bank-link endpoints) on top
of a single ``PlaidApi`` handle that is built once and injected, so no
request constructs its own client.

plaid-python is a blocking client; calls run in the threadpool.
"""

import logging
from typing import Any, Protocol

import plaid
from fastapi.concurrency import run_in_threadpool
from plaid.api import plaid_api
from plaid.model.country_code import CountryCode
from plaid.model.item_public_token_exchange_request import ItemPublicTokenExchangeRequest
from plaid.model.link_token_create_request import LinkTokenCreateRequest
from plaid.model.link_token_create_request_user import LinkTokenCreateRequestUser
from plaid.model.products import Products
from plaid.model.sandbox_public_token_create_request import SandboxPublicTokenCreateRequest
from plaid.model.transactions_sync_request import TransactionsSyncRequest

from envelope_budget.config import Settings
from envelope_budget.core.exceptions import UpstreamError
from envelope_budget.feed.models import FeedPage

logger = logging.getLogger(__name__)

PLAID_HOSTS = {
    "sandbox": plaid.Environment.Sandbox,
    "production": plaid.Environment.Production,
}


class FeedClient(Protocol):
    """Paged transaction feed keyed by an opaque credential and cursor."""

    async def fetch_page(self, credential: str, cursor: str | None) -> FeedPage: ...


class PlaidFeedClient:
    """Plaid-backed feed client and Link helper."""

    def __init__(
        self,
        api: plaid_api.PlaidApi,
        environment: str = "sandbox",
        client_name: str = "Envelope Budgeting App",
        country_codes: list[str] | None = None,
        page_size: int = 100,
        sandbox_institution_id: str = "ins_109508",
    ):
        self.api = api
        self.environment = environment
        self.client_name = client_name
        self.country_codes = country_codes or ["US"]
        self.page_size = page_size
        self.sandbox_institution_id = sandbox_institution_id

    @property
    def is_sandbox(self) -> bool:
        return self.environment == "sandbox"

    async def _call(self, error_code: str, operation: str, fn, request) -> dict[str, Any]:
        try:
            response = await run_in_threadpool(fn, request)
        except plaid.ApiException as exc:
            # Response bodies can echo tokens; log only the status.
            logger.error(
                f"Plaid {operation} failed",
                extra={"operation": operation, "status": getattr(exc, "status", None)},
            )
            raise UpstreamError(
                error_code, details={"operation": operation, "status": getattr(exc, "status", None)}
            ) from exc
        return response.to_dict()

    async def fetch_page(self, credential: str, cursor: str | None) -> FeedPage:
        """Request one ``/transactions/sync`` page."""
        kwargs: dict[str, Any] = {"access_token": credential, "count": self.page_size}
        if cursor:
            kwargs["cursor"] = cursor
        data = await self._call(
            "BANK_002", "transactions_sync", self.api.transactions_sync, TransactionsSyncRequest(**kwargs)
        )
        return FeedPage.from_plaid(data)

    async def create_link_token(self, client_user_id: str) -> str:
        request = LinkTokenCreateRequest(
            products=[Products("transactions")],
            client_name=self.client_name,
            country_codes=[CountryCode(code) for code in self.country_codes],
            language="en",
            user=LinkTokenCreateRequestUser(client_user_id=client_user_id),
        )
        data = await self._call("BANK_003", "link_token_create", self.api.link_token_create, request)
        return data["link_token"]

    async def exchange_public_token(self, public_token: str) -> tuple[str, str | None]:
        """Exchange a Link public token for a long-lived access token and item id."""
        request = ItemPublicTokenExchangeRequest(public_token=public_token)
        data = await self._call(
            "BANK_003", "item_public_token_exchange", self.api.item_public_token_exchange, request
        )
        return data["access_token"], data.get("item_id")

    async def create_sandbox_public_token(self) -> str:
        request = SandboxPublicTokenCreateRequest(
            institution_id=self.sandbox_institution_id,
            initial_products=[Products("transactions")],
        )
        data = await self._call(
            "BANK_003", "sandbox_public_token_create", self.api.sandbox_public_token_create, request
        )
        return data["public_token"]


def build_plaid_client(settings: Settings) -> PlaidFeedClient:
    """Construct the long-lived Plaid client from settings."""
    host = PLAID_HOSTS.get(settings.plaid_env.lower(), plaid.Environment.Sandbox)
    configuration = plaid.Configuration(
        host=host,
        api_key={
            "clientId": settings.plaid_client_id,
            "secret": settings.plaid_secret,
        },
    )
    api = plaid_api.PlaidApi(plaid.ApiClient(configuration))
    return PlaidFeedClient(
        api,
        environment=settings.plaid_env.lower(),
        client_name=settings.plaid_client_name,
        country_codes=settings.plaid_country_codes,
        page_size=settings.plaid_page_size,
        sandbox_institution_id=settings.plaid_sandbox_institution_id,
    )
