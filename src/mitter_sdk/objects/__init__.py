"""Remote-backed entity handles with lazy or eager synchronization."""

from .base import UNCACHED, Cached, FetchMode, MitterObject, Uncached
from .channel import MitterChannel
from .message import MitterMessage

__all__ = [
    "Cached",
    "FetchMode",
    "MitterChannel",
    "MitterMessage",
    "MitterObject",
    "UNCACHED",
    "Uncached",
]
