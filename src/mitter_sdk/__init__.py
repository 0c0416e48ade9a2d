"""Python client SDK for the Mitter messaging platform."""

from .client import Mitter
from .errors import MitterError, StaleProxyFetch, TransportFailure
from .objects import FetchMode, MitterChannel, MitterMessage, MitterObject
from .pagination import (
    CursorPage,
    Direction,
    FetchGateway,
    FetchPhase,
    PageCursor,
    PaginationManager,
    PaginationSnapshot,
)
from .viewport import MessageListDriver

__version__ = "0.1.0"

__all__ = [
    "CursorPage",
    "Direction",
    "FetchGateway",
    "FetchMode",
    "FetchPhase",
    "MessageListDriver",
    "Mitter",
    "MitterChannel",
    "MitterError",
    "MitterMessage",
    "MitterObject",
    "PageCursor",
    "PaginationManager",
    "PaginationSnapshot",
    "StaleProxyFetch",
    "TransportFailure",
]
