"""Fetch gateway protocol and the default implementation over ``MessagesClient``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from .page import CursorPage, Direction, PageCursor

if TYPE_CHECKING:  # pragma: no cover - type-checking only
    from mitter_sdk.clients.messages import MessagesClient

logger = logging.getLogger(__name__)


class FetchGateway(Protocol):
    """Executes exactly one page fetch; raises ``TransportFailure`` on error."""

    async def fetch_page(
        self, channel_id: str, cursor: PageCursor, limit: int
    ) -> CursorPage:
        ...


class MessagesFetchGateway:
    """Adapts :meth:`MessagesClient.get_messages` to :class:`FetchGateway`."""

    def __init__(self, messages_client: "MessagesClient") -> None:
        self._client = messages_client

    async def fetch_page(
        self, channel_id: str, cursor: PageCursor, limit: int
    ) -> CursorPage:
        items = await self._client.get_messages(
            channel_id, before=cursor.before, after=cursor.after, limit=limit
        )
        direction = Direction.FORWARD if cursor.after is not None else Direction.BACKWARD
        page = CursorPage.from_items(items, direction=direction, limit=limit)
        logger.debug(
            "Fetched %d messages from channel %s (%s, has_more=%s)",
            len(page.items),
            channel_id,
            cursor,
            page.has_more,
        )
        return page
