"""
Viewport adapter for infinite-scroll message lists.

:class:`MessageListDriver` is the glue between a scrolling list widget and a
:class:`~mitter_sdk.pagination.PaginationManager`. The widget reports scroll
offsets and "boundary reached" events; the driver decides whether that should
become a ``request_more`` call and keeps the latest snapshot for rendering.
"""

from __future__ import annotations

import logging
from typing import Callable

from mitter_sdk.errors import TransportFailure
from mitter_sdk.models import Message
from mitter_sdk.pagination import Direction, PaginationManager, PaginationSnapshot

logger = logging.getLogger(__name__)


class MessageListDriver:
    def __init__(
        self,
        manager: PaginationManager,
        on_render: Callable[[PaginationSnapshot], None] | None = None,
    ) -> None:
        self._manager = manager
        self._on_render = on_render
        self._scroll_top = 0.0
        self._snapshot = manager.snapshot()
        self._unsubscribe = manager.subscribe(self._handle_snapshot)

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._snapshot.messages

    @property
    def is_loading(self) -> bool:
        return self._snapshot.is_loading

    @property
    def load_failed(self) -> bool:
        """``True`` while the last fetch failed and a retry is available."""

        return self._snapshot.failed

    def on_scroll(self, scroll_top: float) -> None:
        self._scroll_top = scroll_top

    async def load_initial(self) -> bool:
        """Fetch the newest page when the list is first shown."""

        return await self._request(Direction.BACKWARD)

    async def on_boundary_reached(self, direction: Direction = Direction.BACKWARD) -> bool:
        """
        Handle the list reaching its top (older) or bottom (newer) edge.

        Backward loads only fire once the user has scrolled away from the
        initial position, so the first layout pass does not trigger a fetch.
        """
        if self._manager.is_loading:
            return False
        if direction is Direction.BACKWARD and self._scroll_top <= 0 and self.messages:
            return False
        return await self._request(direction)

    async def retry(self) -> bool:
        """Re-issue the direction whose fetch failed last."""

        failed = self._manager.state.failed_direction
        if failed is None:
            return False
        return await self._request(failed)

    def close(self) -> None:
        self._unsubscribe()
        self._manager.close()

    async def _request(self, direction: Direction) -> bool:
        try:
            return await self._manager.request_more(direction)
        except TransportFailure as exc:
            # Rendered as the "load failed" state; the user decides when to retry.
            logger.warning("Loading %s messages failed: %s", direction.value, exc)
            return False

    def _handle_snapshot(self, snapshot: PaginationSnapshot) -> None:
        self._snapshot = snapshot
        if self._on_render is not None:
            self._on_render(snapshot)
