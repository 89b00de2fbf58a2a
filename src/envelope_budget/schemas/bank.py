"""Schemas for bank link and sync endpoints."""

from pydantic import BaseModel, Field


class LinkTokenResponse(BaseModel):
    link_token: str


class PublicTokenResponse(BaseModel):
    public_token: str


class ExchangeTokenRequest(BaseModel):
    public_token: str = Field(..., min_length=1)


class ExchangeTokenResponse(BaseModel):
    message: str = "Bank account linked successfully"


class SyncResult(BaseModel):
    """Counts of records received from the feed during one sync."""

    added_count: int
    modified_count: int
    removed_count: int
