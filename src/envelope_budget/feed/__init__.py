"""Bank transaction feed: record types, the Plaid client and the paged reader."""

from .client import FeedClient, PlaidFeedClient, build_plaid_client
from .models import FeedPage, FeedSyncResult, FeedTransaction
from .reader import FeedReader

__all__ = [
    "FeedClient",
    "FeedPage",
    "FeedReader",
    "FeedSyncResult",
    "FeedTransaction",
    "PlaidFeedClient",
    "build_plaid_client",
]
