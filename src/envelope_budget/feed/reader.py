"""Cursor-paged feed reader.

Pages are requested strictly one after another because each request needs the
cursor returned by the previous one. ``pages`` yields them lazily so a caller
can stop or checkpoint between pages; ``read_all`` drains the feed and only
returns once the feed reports no more pages, so a failure on any page leaves
the caller's stored cursor untouched.
"""

import logging
from collections.abc import AsyncIterator

from envelope_budget.feed.client import FeedClient
from envelope_budget.feed.models import FeedPage, FeedSyncResult

logger = logging.getLogger(__name__)


class FeedReader:
    """Reads the bank feed page by page through an injected client."""

    def __init__(self, client: FeedClient):
        self.client = client

    async def pages(self, credential: str, cursor: str | None) -> AsyncIterator[FeedPage]:
        """Yield pages starting at ``cursor`` until the feed has no more."""
        while True:
            page = await self.client.fetch_page(credential, cursor)
            yield page
            cursor = page.next_cursor
            if not page.has_more:
                return

    async def read_all(self, credential: str, cursor: str | None) -> FeedSyncResult:
        """Accumulate added/modified/removed across all pages.

        Raises:
            UpstreamError: If any page request fails
        """
        result = FeedSyncResult(cursor=cursor)
        async for page in self.pages(credential, cursor):
            result.added.extend(page.added)
            result.modified.extend(page.modified)
            result.removed.extend(page.removed)
            result.cursor = page.next_cursor
            result.pages += 1

        logger.info(
            "Feed read complete",
            extra={
                "pages": result.pages,
                "added": len(result.added),
                "modified": len(result.modified),
                "removed": len(result.removed),
            },
        )
        return result
