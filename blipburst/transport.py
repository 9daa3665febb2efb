"""
Network caller capability consumed by the injector, plus the default
httpx-backed implementation.
"""
from __future__ import annotations

from typing import Any, Protocol

import httpx
import structlog

log = structlog.get_logger(__name__)


class NetworkCaller(Protocol):
    async def __call__(self, url: str) -> Any: ...


class HttpxCaller:
    """
    GET the URL and decode the JSON body.
    Non-2xx responses raise httpx.HTTPStatusError; nothing is caught here.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._headers = dict(headers or {})
        self._transport = transport

    async def __call__(self, url: str) -> Any:
        async with httpx.AsyncClient(transport=self._transport) as client:
            resp = await client.get(url, headers=self._headers, timeout=self._timeout)
            log.debug("transport.response", url=url, status_code=resp.status_code)
            resp.raise_for_status()
            return resp.json()
