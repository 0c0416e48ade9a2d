"""
Error taxonomy shared by the HTTP clients, object proxies and pagination.

End-of-data is deliberately absent: running out of history in one direction
is a pagination state (see :class:`mitter_sdk.pagination.manager.FetchPhase`),
not an exception.
"""

from __future__ import annotations

__all__ = ["MitterError", "TransportFailure", "StaleProxyFetch"]


class MitterError(RuntimeError):
    """Base class for every error raised by the SDK."""

    pass


class TransportFailure(MitterError):
    """Raised when a request to the platform fails on the network or with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        method: str | None = None,
        url: str | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.method = method
        self.url = url
        self.body = body

    @property
    def is_client_error(self) -> bool:
        return self.status is not None and 400 <= self.status < 500


class StaleProxyFetch(MitterError):
    """Raised when a remote-backed object could not be (re)fetched; any cached value is kept."""

    pass
