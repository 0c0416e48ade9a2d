"""
Lazily-synchronized handles over remotely fetched objects.

A :class:`MitterObject` wraps a fetch coroutine and a tagged cache state:

    - ``Uncached``        -> nothing fetched yet (or every fetch failed)
    - ``Cached(value)``   -> authoritative until :meth:`sync` or :meth:`set_ref`

Field reads go through :meth:`MitterObject.proxy`, which answers from the
cache when possible and otherwise joins (or starts) a single pending fetch.
``EAGER`` handles start that fetch in the background as soon as they are
constructed; failures there are only logged.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, TypeVar, Union

from mitter_sdk.errors import StaleProxyFetch

logger = logging.getLogger(__name__)

U = TypeVar("U")


class FetchMode(Enum):
    LAZY = "lazy"
    EAGER = "eager"


@dataclass(frozen=True, slots=True)
class Uncached:
    pass


@dataclass(frozen=True, slots=True)
class Cached(Generic[U]):
    value: U


UNCACHED = Uncached()

CacheState = Union[Uncached, Cached[U]]


def _field(value: Any, key: str) -> Any:
    if isinstance(value, dict):
        return value[key]
    return getattr(value, key)


class MitterObject(Generic[U]):
    """Base class for remote-backed entity handles."""

    def __init__(
        self,
        fetch_call: Callable[[], Awaitable[U]],
        mode: FetchMode = FetchMode.LAZY,
    ) -> None:
        self._fetch_call = fetch_call
        self._mode = mode
        self._state: CacheState = UNCACHED
        self._generation = 0
        self._pending: asyncio.Task[U] | None = None

        if mode is FetchMode.EAGER:
            self._start_warmup()

    # ------------------------------------------------------------------ #
    # Cache state
    # ------------------------------------------------------------------ #

    @property
    def mode(self) -> FetchMode:
        return self._mode

    @property
    def cache_state(self) -> CacheState:
        return self._state

    @property
    def is_cached(self) -> bool:
        return isinstance(self._state, Cached)

    def set_ref(self, value: U) -> None:
        """Overwrite the cache with ``value`` obtained elsewhere (e.g. a write response)."""

        self._state = Cached(value)
        self._generation += 1

    # ------------------------------------------------------------------ #
    # Fetching
    # ------------------------------------------------------------------ #

    async def sync(self) -> U:
        """
        Fetch unconditionally, cache and return the fresh value.

        :raises StaleProxyFetch: when the fetch fails; the previous cache is kept.
        """
        value = await self._fetch()
        self.set_ref(value)
        return value

    async def _fetch(self) -> U:
        try:
            return await self._fetch_call()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            raise StaleProxyFetch(f"Failed to fetch {type(self).__name__}") from exc

    async def _fill(self) -> U:
        """Fetch for the shared pending task; a value set meanwhile wins over the result."""

        generation = self._generation
        value = await self._fetch()
        state = self._state
        if self._generation != generation and isinstance(state, Cached):
            logger.debug("Discarding stale fetch for %s", type(self).__name__)
            return state.value
        self.set_ref(value)
        return value

    async def proxy(self, key: str) -> Any:
        """Return field ``key``, fetching the object first if nothing is cached."""

        state = self._state
        if isinstance(state, Cached):
            return _field(state.value, key)
        value = await self._join_pending()
        return _field(value, key)

    async def get(self) -> U:
        """Return the whole cached object, fetching it if needed."""

        state = self._state
        if isinstance(state, Cached):
            return state.value
        return await self._join_pending()

    async def _join_pending(self) -> U:
        # Concurrent uncached reads share one fetch.
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._fill())
            self._pending.add_done_callback(self._clear_pending)
        return await asyncio.shield(self._pending)

    def _clear_pending(self, task: asyncio.Task) -> None:
        if self._pending is task:
            self._pending = None
        if not task.cancelled() and task.exception() is not None:
            logger.debug("Fetch for %s failed: %s", type(self).__name__, task.exception())

    def _start_warmup(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(
                "No running event loop; %s falls back to lazy fetching", type(self).__name__
            )
            return
        self._pending = loop.create_task(self._fill())
        self._pending.add_done_callback(self._finish_warmup)

    def _finish_warmup(self, task: asyncio.Task) -> None:
        self._clear_pending(task)
        if not task.cancelled() and task.exception() is not None:
            logger.warning(
                "Eager fetch for %s failed; will retry on first read",
                type(self).__name__,
            )
