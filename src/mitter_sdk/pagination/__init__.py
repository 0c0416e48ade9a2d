"""
Cursor pagination of channel history.

Modules
=======

``page``
    :class:`~mitter_sdk.pagination.page.Direction`,
    :class:`~mitter_sdk.pagination.page.PageCursor` and the immutable
    :class:`~mitter_sdk.pagination.page.CursorPage` batch value.
``store``
    :class:`~mitter_sdk.pagination.store.OrderedMessageStore`, the
    oldest -> newest, id-unique accumulated view.
``gateway``
    The :class:`~mitter_sdk.pagination.gateway.FetchGateway` protocol and
    :class:`~mitter_sdk.pagination.gateway.MessagesFetchGateway`, which fetches
    pages through ``MessagesClient``.
``manager``
    :class:`~mitter_sdk.pagination.manager.PaginationManager`, the
    single-flight controller consumed by viewport drivers.
"""

from .gateway import FetchGateway, MessagesFetchGateway
from .manager import (
    FetchPhase,
    PaginationManager,
    PaginationSnapshot,
    PaginationState,
)
from .page import CursorPage, Direction, PageCursor
from .store import MergeResult, OrderedMessageStore

__all__ = [
    "CursorPage",
    "Direction",
    "FetchGateway",
    "FetchPhase",
    "MergeResult",
    "MessagesFetchGateway",
    "OrderedMessageStore",
    "PageCursor",
    "PaginationManager",
    "PaginationSnapshot",
    "PaginationState",
]
