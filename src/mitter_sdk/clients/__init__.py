"""
Typed HTTP clients.

Modules
=======

``http``
    :class:`~mitter_sdk.clients.http.ApiClient`, the aiohttp gateway shared by
    every service client, plus request interceptor plumbing.
``messages``
    :class:`~mitter_sdk.clients.messages.MessagesClient` for sending, fetching,
    paginating and deleting messages, including multipart uploads.
``channels``
    :class:`~mitter_sdk.clients.channels.ChannelsClient` for channels and
    participants.
``entities``
    :class:`~mitter_sdk.clients.entities.EntitiesClient` for entity profiles.
"""

from .channels import ChannelsClient
from .entities import EntitiesClient
from .http import ApiClient, RequestInterceptor, RequestParams
from .messages import BlobConfig, MessagesClient, UriConfig

__all__ = [
    "ApiClient",
    "BlobConfig",
    "ChannelsClient",
    "EntitiesClient",
    "MessagesClient",
    "RequestInterceptor",
    "RequestParams",
    "UriConfig",
]
