"""Lazily-synchronized channel handle."""

from __future__ import annotations

from typing import Awaitable, Callable, List

from mitter_sdk.models import (
    Channel,
    ChannelParticipation,
    EntityMetadata,
    EntityProfile,
    TimelineEvent,
)

from .base import FetchMode, MitterObject


class MitterChannel(MitterObject[Channel]):
    def __init__(
        self,
        channel_id: str,
        fetch_call: Callable[[], Awaitable[Channel]],
        mode: FetchMode = FetchMode.LAZY,
    ) -> None:
        self.channel_id = channel_id
        super().__init__(fetch_call, mode)

    async def default_rule_set(self) -> str:
        return await self.proxy("default_rule_set")

    async def participation(self) -> List[ChannelParticipation]:
        return await self.proxy("participation")

    async def entity_profile(self) -> EntityProfile | None:
        return await self.proxy("entity_profile")

    async def timeline_events(self) -> List[TimelineEvent]:
        return await self.proxy("timeline_events")

    async def system_channel(self) -> bool:
        return await self.proxy("system_channel")

    async def entity_metadata(self) -> EntityMetadata:
        return await self.proxy("entity_metadata")

    def __repr__(self) -> str:
        return f"MitterChannel(channel_id={self.channel_id!r}, cached={self.is_cached})"
