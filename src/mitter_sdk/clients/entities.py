"""Client for user and channel profile endpoints."""

from __future__ import annotations

from mitter_sdk.models import EntityProfile

from .http import ApiClient, api_path


class EntitiesClient:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get_user_profile(self, user_id: str = "me") -> EntityProfile:
        data = await self._api.get(api_path("v1", "users", user_id, "profile"))
        return EntityProfile.from_dict(data)

    async def get_channel_profile(self, channel_id: str) -> EntityProfile:
        data = await self._api.get(api_path("v1", "channels", channel_id, "profile"))
        return EntityProfile.from_dict(data)
