"""
Ordered, de-duplicated message store for one channel.

The :class:`OrderedMessageStore` keeps every message fetched so far in a
single canonical order (oldest -> newest) together with an id index, no matter
which direction a batch arrived from. A message whose id is already stored is
never added twice; the most recently merged copy replaces the stored one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Hashable, Iterable, List

from mitter_sdk.models import Message, message_order_key


@dataclass(frozen=True, slots=True)
class MergeResult:
    added: int = 0
    replaced: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.added or self.replaced)


@dataclass
class OrderedMessageStore:
    """In-memory accumulated view of a channel's history."""

    key: Callable[[Message], Hashable] = message_order_key
    _messages: List[Message] = field(init=False, repr=False, default_factory=list)
    _index: dict[str, Message] = field(init=False, repr=False, default_factory=dict)

    def merge(self, messages: Iterable[Message]) -> MergeResult:
        """Merge ``messages`` into the store, returning how many were added or replaced."""

        added = replaced = 0
        for message in messages:
            if message.message_id is None:
                raise ValueError("Cannot store a message without an id")
            existing = self._index.get(message.message_id)
            if existing is None:
                added += 1
            elif existing != message:
                replaced += 1
            else:
                continue
            self._index[message.message_id] = message
        result = MergeResult(added=added, replaced=replaced)
        if result.changed:
            # Rebuilt as one snapshot so readers never observe a half-sorted list.
            self._messages = sorted(self._index.values(), key=self.key)
        return result

    def snapshot(self) -> tuple[Message, ...]:
        """Return every stored message ordered oldest -> newest."""

        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
