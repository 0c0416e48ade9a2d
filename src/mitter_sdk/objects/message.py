"""Lazily-synchronized message handle."""

from __future__ import annotations

from typing import Awaitable, Callable, List

from mitter_sdk.models import EntityMetadata, Message, TimelineEvent

from .base import FetchMode, MitterObject


class MitterMessage(MitterObject[Message]):
    def __init__(
        self,
        message_id: str,
        fetch_call: Callable[[], Awaitable[Message]],
        mode: FetchMode = FetchMode.LAZY,
    ) -> None:
        self.message_id = message_id
        super().__init__(fetch_call, mode)

    async def sender_id(self) -> str | None:
        return await self.proxy("sender_id")

    async def text_payload(self) -> str:
        return await self.proxy("text_payload")

    async def message_type(self) -> str:
        return await self.proxy("message_type")

    async def payload_type(self) -> str:
        return await self.proxy("payload_type")

    async def timeline_events(self) -> List[TimelineEvent]:
        return await self.proxy("timeline_events")

    async def entity_metadata(self) -> EntityMetadata:
        return await self.proxy("entity_metadata")

    def __repr__(self) -> str:
        return f"MitterMessage(message_id={self.message_id!r}, cached={self.is_cached})"
