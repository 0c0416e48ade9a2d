"""Client for channel and participant endpoints."""

from __future__ import annotations

import logging
from typing import List

from mitter_sdk.models import Channel, ChannelParticipation, ParticipatedChannel
from mitter_sdk.objects import FetchMode, MitterChannel

from .http import ApiClient, api_path

logger = logging.getLogger(__name__)


class ChannelsClient:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def new_channel(self, channel: Channel) -> str:
        """Create ``channel`` and return the identifier assigned by the platform."""

        data = await self._api.post(api_path("v1", "channels"), json=channel.to_dict())
        if isinstance(data, dict):
            return str(data.get("identifier") or data.get("channelId"))
        return str(data)

    async def get_channel(self, channel_id: str) -> Channel:
        data = await self._api.get(api_path("v1", "channels", channel_id))
        return Channel.from_dict(data)

    def get_channel_handle(
        self, channel_id: str, mode: FetchMode = FetchMode.LAZY
    ) -> MitterChannel:
        """Return a lazily-synchronized handle for ``channel_id``."""

        return MitterChannel(channel_id, lambda: self.get_channel(channel_id), mode)

    async def get_all_channels(self) -> List[Channel]:
        data = await self._api.get(api_path("v1", "channels"))
        return [Channel.from_dict(c) for c in data or []]

    async def participated_channels(self) -> List[ParticipatedChannel]:
        data = await self._api.get(api_path("v1", "users", "me", "channels"))
        return [ParticipatedChannel.from_dict(p) for p in data or []]

    async def delete_channel(self, channel_id: str) -> None:
        await self._api.delete(api_path("v1", "channels", channel_id))

    async def add_participant(
        self, channel_id: str, participation: ChannelParticipation
    ) -> None:
        await self._api.post(
            api_path("v1", "channels", channel_id, "participants"),
            json=participation.to_dict(),
        )

    async def remove_participant(self, channel_id: str, participant_id: str) -> None:
        await self._api.delete(
            api_path("v1", "channels", channel_id, "participants", participant_id)
        )

    async def get_channel_participants(self, channel_id: str) -> List[ChannelParticipation]:
        data = await self._api.get(api_path("v1", "channels", channel_id, "participants"))
        return [ChannelParticipation.from_dict(p) for p in data or []]
