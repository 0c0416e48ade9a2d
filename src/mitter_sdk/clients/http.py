"""
Thin async HTTP layer over :mod:`aiohttp`.

:class:`ApiClient` owns (or borrows) a ``ClientSession``, resolves request
paths against the configured API base URL, runs request interceptors and
turns every transport problem into :class:`~mitter_sdk.errors.TransportFailure`.
Interceptors are plain callables that may mutate the outgoing
:class:`RequestParams`; authentication headers are attached this way by the
host application.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List
from urllib.parse import quote

import aiohttp

from mitter_sdk.config import core
from mitter_sdk.errors import TransportFailure

logger = logging.getLogger(__name__)

APPLICATION_ID_HEADER = "X-Mitter-Application-Id"


@dataclass(slots=True)
class RequestParams:
    """Mutable description of an outgoing request, handed to interceptors."""

    method: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    data: Any = None


RequestInterceptor = Callable[[RequestParams], None]


def api_path(*segments: str) -> str:
    """Join ``segments`` into an absolute API path, escaping each one (commas kept for id lists)."""

    return "/" + "/".join(quote(str(s), safe=",") for s in segments)


class ApiClient:
    """Shared HTTP gateway used by every typed service client."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        interceptors: Iterable[RequestInterceptor] = (),
        application_id: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or core.API_BASE_URL).rstrip("/")
        self.application_id = application_id or core.APPLICATION_ID
        self._timeout = timeout if timeout is not None else core.REQUEST_TIMEOUT
        self._interceptors: List[RequestInterceptor] = list(interceptors)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def add_interceptor(self, interceptor: RequestInterceptor) -> None:
        self._interceptors.append(interceptor)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def prepare(self, method: str, path: str, **kwargs: Any) -> RequestParams:
        """Build request params with default headers and run interceptors."""

        headers = {"User-Agent": core.USER_AGENT}
        if self.application_id:
            headers[APPLICATION_ID_HEADER] = self.application_id
        headers.update(kwargs.get("headers") or {})
        params = RequestParams(
            method=method.upper(),
            path=path,
            headers=headers,
            params={k: v for k, v in (kwargs.get("params") or {}).items() if v is not None},
            data=kwargs.get("data"),
        )
        for interceptor in self._interceptors:
            interceptor(params)
        return params

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            )
            self._owns_session = True
        return self._session

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        json: Any = None,
        data: Any = None,
        headers: Dict[str, str] | None = None,
    ) -> Any:
        """
        Send a request and return the decoded body.

        JSON responses are decoded, empty bodies yield ``None`` and anything
        else is returned as text.

        :raises TransportFailure: on connection errors, timeouts, non-2xx responses
            and JSON bodies that fail to decode.
        """
        prepared = self.prepare(
            method, path, params=params, data=json if data is None else data, headers=headers
        )
        url = self.url_for(prepared.path)
        send_kwargs: Dict[str, Any] = {"params": prepared.params, "headers": prepared.headers}
        if data is not None:
            send_kwargs["data"] = prepared.data
        elif json is not None:
            send_kwargs["json"] = prepared.data

        logger.debug("%s %s params=%s", prepared.method, url, prepared.params)
        session = self._get_session()
        try:
            async with session.request(prepared.method, url, **send_kwargs) as resp:
                if resp.status >= 400:
                    body = await resp.text()
                    raise TransportFailure(
                        f"{prepared.method} {url} failed with HTTP {resp.status}",
                        status=resp.status,
                        method=prepared.method,
                        url=url,
                        body=body,
                    )
                if resp.status == 204:
                    return None
                if resp.content_type == "application/json":
                    return await resp.json()
                text = await resp.text()
                return text or None
        except TransportFailure:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise TransportFailure(
                f"{prepared.method} {url} failed: {exc!r}",
                method=prepared.method,
                url=url,
            ) from exc

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
