"""SDK entry point bundling the typed service clients over one HTTP session."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from mitter_sdk.clients import (
    ApiClient,
    ChannelsClient,
    EntitiesClient,
    MessagesClient,
    RequestInterceptor,
)
from mitter_sdk.clients.messages import ProcessMultipartRequest

logger = logging.getLogger(__name__)


class Mitter:
    """
    Facade over :class:`ApiClient` and the service clients.

    Use as ``async with Mitter(...) as mitter:`` so the underlying aiohttp
    session is closed on exit.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        application_id: str | None = None,
        interceptors: Iterable[RequestInterceptor] = (),
        process_multipart_request: ProcessMultipartRequest | None = None,
        api: ApiClient | None = None,
    ) -> None:
        if api is None:
            api = ApiClient(base_url, application_id=application_id, interceptors=interceptors)
        else:
            for interceptor in interceptors:
                api.add_interceptor(interceptor)
        self.api = api
        self.messages = MessagesClient(self.api, process_multipart_request)
        self.channels = ChannelsClient(self.api)
        self.entities = EntitiesClient(self.api)
        logger.debug("Mitter client ready for %s", self.api.base_url)

    async def __aenter__(self) -> "Mitter":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self.api.close()
