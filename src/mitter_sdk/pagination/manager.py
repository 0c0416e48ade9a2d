"""
Bidirectional cursor pagination over a channel's message history.

Lifecycle
=========
1. ``request_more(direction)`` is a no-op while a fetch is in flight, once the
   direction is exhausted, or after ``close()``.
2. Otherwise the manager moves to ``FETCHING`` and asks the gateway for one
   page starting at that direction's cursor (no cursor on the first call).
3. A page is merged into the :class:`OrderedMessageStore`; the direction is
   marked exhausted when the page reports no more data or gives no cursor
   to continue from.
4. A failed fetch leaves the store untouched, records the error, moves to
   ``FAILED`` and re-raises. The caller decides whether and when to retry.

All state lives in one frozen :class:`PaginationState` that is replaced as a
whole on every transition; subscribers receive a :class:`PaginationSnapshot`
after each one.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterable, List

from mitter_sdk.config import pagination
from mitter_sdk.models import Message

from .gateway import FetchGateway
from .page import CursorPage, Direction, PageCursor
from .store import OrderedMessageStore

logger = logging.getLogger(__name__)


class FetchPhase(Enum):
    """
    Fetch phases.

    ``PaginationState.phase`` only ever holds ``IDLE``, ``FETCHING`` or
    ``FAILED``. Exhaustion is per direction: check
    :meth:`PaginationManager.is_exhausted` or
    :meth:`PaginationState.direction_phase`, never ``state.phase``.
    """

    IDLE = "idle"
    FETCHING = "fetching"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PaginationState:
    phase: FetchPhase = FetchPhase.IDLE
    in_flight: Direction | None = None
    before_cursor: str | None = None
    after_cursor: str | None = None
    exhausted: frozenset[Direction] = frozenset()
    failed_direction: Direction | None = None
    last_error: BaseException | None = None
    closed: bool = False

    def cursor_for(self, direction: Direction) -> str | None:
        if direction is Direction.BACKWARD:
            return self.before_cursor
        return self.after_cursor

    def with_cursor(self, direction: Direction, token: str | None) -> "PaginationState":
        if direction is Direction.BACKWARD:
            return replace(self, before_cursor=token)
        return replace(self, after_cursor=token)

    def direction_phase(self, direction: Direction) -> FetchPhase:
        """Phase as seen from one direction."""

        if self.in_flight is direction:
            return FetchPhase.FETCHING
        if direction in self.exhausted:
            return FetchPhase.EXHAUSTED
        if self.failed_direction is direction:
            return FetchPhase.FAILED
        return FetchPhase.IDLE


@dataclass(frozen=True, slots=True)
class PaginationSnapshot:
    """What a viewport needs to render: the ordered messages plus loading flags."""

    messages: tuple[Message, ...]
    is_loading: bool
    failed: bool
    exhausted: frozenset[Direction]
    last_error: BaseException | None


Listener = Callable[[PaginationSnapshot], None]


class PaginationManager:
    """Walks one channel's history in pages and keeps a merged, ordered view."""

    def __init__(self, channel_id: str, limit: int, gateway: FetchGateway) -> None:
        self.channel_id = channel_id
        self.limit = max(1, min(int(limit), pagination.MAX_MESSAGE_LIST_LENGTH))
        self._gateway = gateway
        self._store = OrderedMessageStore()
        self._state = PaginationState()
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------ #
    # READ helpers
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> PaginationState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state.phase is FetchPhase.FETCHING

    @property
    def is_closed(self) -> bool:
        return self._state.closed

    def is_exhausted(self, direction: Direction) -> bool:
        return direction in self._state.exhausted

    def current_view(self) -> tuple[Message, ...]:
        """Messages fetched so far, oldest -> newest, one entry per id."""

        return self._store.snapshot()

    def snapshot(self) -> PaginationSnapshot:
        state = self._state
        return PaginationSnapshot(
            messages=self._store.snapshot(),
            is_loading=state.phase is FetchPhase.FETCHING,
            failed=state.phase is FetchPhase.FAILED,
            exhausted=state.exhausted,
            last_error=state.last_error,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for snapshots; returns a callable that unsubscribes it."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------ #
    # WRITE helpers
    # ------------------------------------------------------------------ #

    async def request_more(self, direction: Direction) -> bool:
        """
        Fetch the next page in ``direction``.

        :returns: ``True`` if a page was fetched and merged, ``False`` if the
            call was a no-op (fetch in flight, direction exhausted, or closed).
        :raises TransportFailure: when the gateway fails; the store is unchanged.
        """
        state = self._state
        if state.closed or state.phase is FetchPhase.FETCHING or direction in state.exhausted:
            logger.debug(
                "Ignoring %s request for channel %s (phase=%s, exhausted=%s)",
                direction.value,
                self.channel_id,
                state.phase.value,
                direction in state.exhausted,
            )
            return False

        cursor = PageCursor.for_direction(direction, state.cursor_for(direction))
        self._transition(
            replace(
                state,
                phase=FetchPhase.FETCHING,
                in_flight=direction,
                failed_direction=None,
                last_error=None,
            )
        )

        try:
            page = await self._gateway.fetch_page(self.channel_id, cursor, self.limit)
        except asyncio.CancelledError:
            if not self._state.closed:
                self._transition(replace(self._state, phase=FetchPhase.IDLE, in_flight=None))
            raise
        except Exception as exc:
            if self._state.closed:
                logger.debug("Dropping failed fetch for closed channel %s", self.channel_id)
                return False
            logger.warning(
                "Fetching %s page for channel %s failed: %s",
                direction.value,
                self.channel_id,
                exc,
            )
            self._transition(
                replace(
                    self._state,
                    phase=FetchPhase.FAILED,
                    in_flight=None,
                    failed_direction=direction,
                    last_error=exc,
                )
            )
            raise

        if self._state.closed:
            logger.debug("Dropping page for closed channel %s", self.channel_id)
            return False

        self._merge_page(direction, page)
        return True

    def _merge_page(self, direction: Direction, page: CursorPage) -> None:
        result = self._store.merge(page.items)

        state = self._state
        next_cursor = page.cursor_for(direction)
        if next_cursor is not None:
            state = state.with_cursor(direction, next_cursor)
        opposite = direction.opposite
        if state.cursor_for(opposite) is None and page.cursor_for(opposite) is not None:
            state = state.with_cursor(opposite, page.cursor_for(opposite))

        exhausted = state.exhausted
        if not page.has_more or next_cursor is None:
            exhausted = exhausted | {direction}

        self._transition(
            replace(state, phase=FetchPhase.IDLE, in_flight=None, exhausted=exhausted)
        )
        logger.info(
            "Merged %s page into channel %s: +%d new, %d replaced, %d total%s",
            direction.value,
            self.channel_id,
            result.added,
            result.replaced,
            len(self._store),
            " (exhausted)" if direction in exhausted else "",
        )

    def push(self, messages: Iterable[Message]) -> int:
        """
        Merge messages obtained outside pagination (sent or delivered live).

        Cursors and exhaustion are left alone. Returns the number of messages
        that were new to the store.
        """
        if self._state.closed:
            return 0
        result = self._store.merge(messages)
        if result.changed:
            self._notify()
        return result.added

    def reopen(self, direction: Direction) -> None:
        """Allow ``direction`` to be fetched again, e.g. to poll for newer messages."""

        if direction in self._state.exhausted:
            self._transition(
                replace(self._state, exhausted=self._state.exhausted - {direction})
            )

    def close(self) -> None:
        """Tear down: later fetch results are discarded and listeners are dropped."""

        state = self._state
        phase = FetchPhase.IDLE if state.phase is FetchPhase.FETCHING else state.phase
        self._state = replace(state, phase=phase, in_flight=None, closed=True)
        self._listeners.clear()

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _transition(self, new_state: PaginationState) -> None:
        self._state = new_state
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("Pagination listener failed for channel %s", self.channel_id)
