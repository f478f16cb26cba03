"""
HTTP transports used by the Ed clients.

A transport takes an explicit method, absolute URL, headers and query
parameters, and returns the status plus the raw body. Connectivity failures
surface as TransportError; status codes are left for the caller to judge.

- AiohttpTransport: async, one pooled aiohttp session shared by all calls
- RequestsTransport: blocking, one requests.Session
"""

import asyncio
from dataclasses import dataclass
from typing import Dict, Optional, Protocol, Sequence, Tuple

import aiohttp
import requests

from .errors import TransportError

Params = Sequence[Tuple[str, str]]


@dataclass(frozen=True)
class RawResponse:
    status: int
    body: bytes
    url: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class AsyncTransport(Protocol):
    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Dict[str, str],
        params: Optional[Params] = None,
        body: Optional[bytes] = None,
    ) -> RawResponse: ...

    async def close(self) -> None: ...


class SyncTransport(Protocol):
    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Dict[str, str],
        params: Optional[Params] = None,
        body: Optional[bytes] = None,
    ) -> RawResponse: ...

    def close(self) -> None: ...


class AiohttpTransport:
    """aiohttp transport with connection pooling and a total per-request timeout"""

    def __init__(self, timeout: float = 30.0, session: Optional[aiohttp.ClientSession] = None):
        self.timeout = timeout
        self._session = session
        # a session handed in by the caller is theirs to close
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        # no await between the check and the assignment, so concurrent first
        # calls on one event loop share a single session
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=100,  # Total connection pool size
                limit_per_host=30,  # Connections per host
                ttl_dns_cache=300,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.timeout, connect=10),
            )
            self._owns_session = True
        return self._session

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Dict[str, str],
        params: Optional[Params] = None,
        body: Optional[bytes] = None,
    ) -> RawResponse:
        session = self._get_session()
        try:
            async with session.request(
                method, url, headers=headers, params=params, data=body
            ) as response:
                payload = await response.read()
                return RawResponse(response.status, payload, str(response.url))
        except asyncio.TimeoutError as exc:
            raise TransportError(f"{method} {url} timed out after {self.timeout}s", url) from exc
        except aiohttp.ClientError as exc:
            raise TransportError(f"{method} {url} failed: {exc}", url) from exc

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None


class RequestsTransport:
    """Blocking transport over a reused requests.Session"""

    def __init__(self, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Dict[str, str],
        params: Optional[Params] = None,
        body: Optional[bytes] = None,
    ) -> RawResponse:
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                params=params,
                data=body,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as exc:
            raise TransportError(f"{method} {url} timed out after {self.timeout}s", url) from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}", url) from exc
        return RawResponse(response.status_code, response.content, response.url)

    def close(self) -> None:
        if self._owns_session:
            self.session.close()
