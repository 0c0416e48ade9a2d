"""Client for the message endpoints of the platform."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import IO, Awaitable, Callable, Iterable, List, Union

import aiohttp

from mitter_sdk.config import multipart, pagination
from mitter_sdk.models import (
    ChannelReferencingMessage,
    Message,
    MessageTimelineEvent,
    TimelineEvent,
)
from mitter_sdk.objects import FetchMode, MitterMessage
from mitter_sdk.pagination import MessagesFetchGateway, PaginationManager

from .http import ApiClient, RequestParams, api_path

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BlobConfig:
    """An in-memory or file-like attachment."""

    filename: str
    type: str
    file: Union[bytes, IO[bytes]]


@dataclass(slots=True)
class UriConfig:
    """An attachment addressed by URI; needs a platform multipart handler."""

    filename: str
    type: str
    uri: str


FileConfig = Union[BlobConfig, UriConfig]

# Platform hook that performs a multipart upload on behalf of the SDK.
ProcessMultipartRequest = Callable[
    [RequestParams, str, Message, FileConfig], Awaitable[Message]
]


def clamp_limit(limit: int | None) -> int:
    """Clamp ``limit`` into ``[1, MAX_MESSAGE_LIST_LENGTH]``; ``None`` means the default page size."""

    if limit is None:
        return pagination.DEFAULT_PAGE_SIZE
    return max(1, min(int(limit), pagination.MAX_MESSAGE_LIST_LENGTH))


class MessagesClient:
    """Send, fetch, paginate and delete channel messages."""

    def __init__(
        self,
        api: ApiClient,
        process_multipart_request: ProcessMultipartRequest | None = None,
    ) -> None:
        self._api = api
        self._process_multipart_request = process_multipart_request

    async def send_message(self, channel_id: str, message: Message) -> Message:
        data = await self._api.post(
            api_path("v1", "channels", channel_id, "messages"), json=message.to_dict()
        )
        return Message.from_dict(data) if data else message

    async def get_message(self, message_id: str) -> Message:
        data = await self._api.get(api_path("v1", "messages", message_id))
        return Message.from_dict(data)

    def get_message_handle(
        self, message_id: str, mode: FetchMode = FetchMode.LAZY
    ) -> MitterMessage:
        """Return a lazily-synchronized handle for ``message_id``."""

        return MitterMessage(message_id, lambda: self.get_message(message_id), mode)

    async def get_messages(
        self,
        channel_id: str,
        before: str | None = None,
        after: str | None = None,
        limit: int | None = None,
    ) -> List[ChannelReferencingMessage]:
        """
        Fetch one batch of messages from ``channel_id``.

        :param before: Only messages sent before this message id; newest first.
        :param after: Only messages sent after this message id; oldest first.
        :param limit: Maximum batch size, clamped to the platform maximum.
        :returns: Messages in the order the platform returned them.
        """
        data = await self._api.get(
            api_path("v1", "channels", channel_id, "messages"),
            params={"before": before, "after": after, "limit": clamp_limit(limit)},
        )
        return [ChannelReferencingMessage.from_dict(m) for m in data or []]

    def get_paginated_messages_manager(
        self, channel_id: str, limit: int | None = None
    ) -> PaginationManager:
        """Return a :class:`PaginationManager` walking ``channel_id``'s history."""

        return PaginationManager(
            channel_id, clamp_limit(limit), MessagesFetchGateway(self)
        )

    async def get_message_timeline_events(
        self, channel_id: str, message_ids: str | Iterable[str]
    ) -> List[MessageTimelineEvent]:
        data = await self._api.get(
            api_path("v1", "channels", channel_id, "messages", _join_ids(message_ids), "timeline")
        )
        return [MessageTimelineEvent.from_dict(e) for e in data or []]

    async def add_message_timeline_event(
        self, channel_id: str, message_id: str, timeline_event: TimelineEvent
    ) -> None:
        await self._api.post(
            api_path("v1", "channels", channel_id, "messages", message_id, "timeline"),
            json=timeline_event.to_dict(),
        )

    async def delete_messages(
        self, channel_id: str, message_ids: str | Iterable[str]
    ) -> None:
        await self._api.delete(
            api_path("v1", "channels", channel_id, "messages", _join_ids(message_ids))
        )

    async def upload_file(
        self, channel_id: str, message: Message, file_config: FileConfig
    ) -> Message:
        """
        Send ``message`` with an attachment.

        When the host platform supplied ``process_multipart_request`` the upload
        is delegated to it (with interceptors already applied to the request
        params); otherwise a multipart body is built with :class:`aiohttp.FormData`.
        """
        path = api_path("v1", "channels", channel_id, "messages")
        if self._process_multipart_request is not None:
            params = self._api.prepare("POST", path)
            params.path = self._api.url_for(path)
            return await self._process_multipart_request(params, channel_id, message, file_config)

        if not isinstance(file_config, BlobConfig):
            raise TypeError(
                "URI attachments require a process_multipart_request platform handler"
            )

        form = aiohttp.FormData()
        form.add_field(
            file_config.filename,
            file_config.file,
            filename=file_config.filename,
            content_type=file_config.type,
        )
        form.add_field(
            multipart.MESSAGE_NAME_KEY,
            json.dumps(message.to_dict(), indent=2),
            filename=multipart.MESSAGE_FILE_NAME,
            content_type="application/json",
        )
        logger.info("Uploading %s to channel %s", file_config.filename, channel_id)
        data = await self._api.post(path, data=form)
        return Message.from_dict(data) if data else message


def _join_ids(message_ids: str | Iterable[str]) -> str:
    if isinstance(message_ids, str):
        return message_ids
    return ",".join(message_ids)
