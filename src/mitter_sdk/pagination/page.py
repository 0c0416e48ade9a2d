"""Cursor and page values exchanged between the manager and fetch gateways."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from mitter_sdk.models import Message, message_order_key


class Direction(Enum):
    """Walk direction. ``BACKWARD`` goes to older messages, ``FORWARD`` to newer ones."""

    BACKWARD = "backward"
    FORWARD = "forward"

    @property
    def opposite(self) -> "Direction":
        return Direction.FORWARD if self is Direction.BACKWARD else Direction.BACKWARD


@dataclass(frozen=True, slots=True)
class PageCursor:
    """Query cursor: at most one of ``before`` / ``after`` is set."""

    before: str | None = None
    after: str | None = None

    def __post_init__(self) -> None:
        if self.before is not None and self.after is not None:
            raise ValueError("A page cursor cannot point both before and after")

    @classmethod
    def for_direction(cls, direction: Direction, token: str | None) -> "PageCursor":
        if direction is Direction.BACKWARD:
            return cls(before=token)
        return cls(after=token)


@dataclass(frozen=True, slots=True)
class CursorPage:
    """
    One fetched batch of messages.

    ``items`` are strictly ordered (oldest-first or newest-first) with unique
    ids. ``next_before_cursor`` / ``next_after_cursor`` point at the oldest
    and newest items and are ``None`` for an empty page.
    """

    items: tuple[Message, ...] = ()
    next_before_cursor: str | None = None
    next_after_cursor: str | None = None
    has_more: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        keys = [message_order_key(m) for m in self.items]
        if len({k[1] for k in keys}) != len(keys):
            raise ValueError("Page contains duplicate message ids")
        ascending = all(a < b for a, b in zip(keys, keys[1:]))
        descending = all(a > b for a, b in zip(keys, keys[1:]))
        if not (ascending or descending):
            raise ValueError("Page items are not strictly ordered")

    def cursor_for(self, direction: Direction) -> str | None:
        if direction is Direction.BACKWARD:
            return self.next_before_cursor
        return self.next_after_cursor

    @classmethod
    def from_items(
        cls, items: Iterable[Message], direction: Direction, limit: int
    ) -> "CursorPage":
        """
        Build a page from an unordered batch.

        Duplicate ids keep the last occurrence. Backward pages are ordered
        newest-first, forward pages oldest-first. ``has_more`` is reported
        whenever the batch filled the requested ``limit``.
        """
        by_id: dict[str, Message] = {}
        raw_count = 0
        for message in items:
            raw_count += 1
            by_id[message.message_id] = message
        ordered: Sequence[Message] = sorted(
            by_id.values(),
            key=message_order_key,
            reverse=direction is Direction.BACKWARD,
        )
        if not ordered:
            return cls(has_more=False)
        oldest = min(ordered, key=message_order_key)
        newest = max(ordered, key=message_order_key)
        return cls(
            items=tuple(ordered),
            next_before_cursor=oldest.message_id,
            next_after_cursor=newest.message_id,
            has_more=raw_count >= limit,
        )
