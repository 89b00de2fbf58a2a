"""Bank link and transaction sync endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.api.deps import get_current_user, get_db, get_feed_client, get_feed_reader
from envelope_budget.feed import FeedReader, PlaidFeedClient
from envelope_budget.models.user import User
from envelope_budget.schemas.bank import (
    ExchangeTokenRequest,
    ExchangeTokenResponse,
    LinkTokenResponse,
    PublicTokenResponse,
    SyncResult,
)
from envelope_budget.services.bank import BankLinkService
from envelope_budget.services.sync import SyncReconciler

router = APIRouter(prefix="/bank", tags=["bank"])


@router.post("/link-token", response_model=LinkTokenResponse, summary="Create Link token")
async def create_link_token(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    client: PlaidFeedClient = Depends(get_feed_client),
) -> LinkTokenResponse:
    link_token = await BankLinkService(db, client).create_link_token(current_user)
    return LinkTokenResponse(link_token=link_token)


@router.post(
    "/sandbox-public-token",
    response_model=PublicTokenResponse,
    summary="Create sandbox public token",
    description="Sandbox only: link a test institution without the Link UI.",
)
async def create_sandbox_public_token(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    client: PlaidFeedClient = Depends(get_feed_client),
) -> PublicTokenResponse:
    public_token = await BankLinkService(db, client).create_sandbox_public_token()
    return PublicTokenResponse(public_token=public_token)


@router.post(
    "/exchange-token",
    response_model=ExchangeTokenResponse,
    summary="Link bank account",
    description="Exchange a Link public token. Any previous sync cursor is discarded.",
)
async def exchange_public_token(
    data: ExchangeTokenRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    client: PlaidFeedClient = Depends(get_feed_client),
) -> ExchangeTokenResponse:
    await BankLinkService(db, client).link_account(current_user, data.public_token)
    return ExchangeTokenResponse()


@router.post(
    "/sync",
    response_model=SyncResult,
    summary="Sync transactions",
    description="""
    Pull new, changed and removed transactions from the linked bank and
    auto-assign new ones to envelopes using the user's rules.
    """,
)
async def sync_transactions(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    reader: FeedReader = Depends(get_feed_reader),
) -> SyncResult:
    """
    Raises:
        400: No bank account linked
        502: Bank feed request failed
    """
    return await SyncReconciler(db, reader).sync_user(current_user)
