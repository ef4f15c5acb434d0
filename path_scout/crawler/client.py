# path_scout/crawler/client.py
"""
HTTP transport for the workers: one GET per call, redirects reported instead of followed.
"""
from __future__ import annotations

import asyncio
from typing import Any, Mapping, Optional
from urllib.parse import urljoin

from aiohttp import ClientError, ClientResponse, ClientResponseError, ClientSession, ClientTimeout

from path_scout.config import ScanSettings
from path_scout.logger import logger

REDIRECT_CODES = frozenset({301, 302, 303, 307, 308})


class TransportError(Exception):
    """Network-level failure of a fetch; *status* is set when a status line was received."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class FetchResponse:
    """A received response. Use as ``async with`` so the connection is always released."""

    def __init__(self, url: str, response: ClientResponse) -> None:
        self.url = url
        self._response = response
        self.status: int = response.status
        self.headers: Mapping[str, str] = response.headers
        self.content_length: Optional[int] = response.content_length
        self.content_type: str = response.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
        self.redirect: Optional[str] = None
        if self.status in REDIRECT_CODES:
            location = response.headers.get("Location")
            if location:
                self.redirect = urljoin(url, location)

    async def read(self) -> bytes:
        """Read the whole body. Raises TransportError if the connection fails mid-body."""
        try:
            return await self._response.read()
        except asyncio.TimeoutError as e:
            raise TransportError(f"timeout reading body of {self.url}", status=self.status) from e
        except ClientError as e:
            raise TransportError(str(e) or type(e).__name__, status=self.status) from e

    def release(self) -> None:
        self._response.release()

    async def __aenter__(self) -> FetchResponse:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.release()


class Client:
    """Per-worker HTTP client. The session is created lazily inside the running loop."""

    def __init__(self, timeout: float, user_agent: str, proxy: Optional[str] = None) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.proxy = proxy
        self.session: Optional[ClientSession] = None

    def _get_session(self) -> ClientSession:
        if self.session is None or self.session.closed:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                headers={"User-Agent": self.user_agent},
                raise_for_status=False,
            )
        return self.session

    async def request_url(self, url: str) -> FetchResponse:
        """
        Issue one GET for *url* without following redirects.

        Raises TransportError on DNS, connection, timeout or URL errors.
        """
        session = self._get_session()
        kwargs: dict[str, Any] = {"allow_redirects": False}
        if self.proxy:
            kwargs["proxy"] = self.proxy
        try:
            resp = await session.get(url, **kwargs)
        except ClientResponseError as e:
            raise TransportError(str(e) or type(e).__name__, status=e.status) from e
        except asyncio.TimeoutError as e:
            raise TransportError(f"timeout after {self.timeout} s") from e
        except (ClientError, ValueError) as e:
            raise TransportError(str(e) or type(e).__name__) from e
        logger.debug("GET %s -> %d", url, resp.status)
        return FetchResponse(url, resp)

    async def close(self) -> None:
        if self.session and not self.session.closed:
            await self.session.close()


class ClientFactory:
    """Builds one Client per worker from the scan settings."""

    def __init__(self, settings: ScanSettings) -> None:
        self.settings = settings
        self.clients: list[Client] = []

    def get(self) -> Client:
        client = Client(
            timeout=self.settings.timeout,
            user_agent=self.settings.user_agent,
            proxy=self.settings.proxy,
        )
        self.clients.append(client)
        return client

    async def close_all(self) -> None:
        for client in self.clients:
            await client.close()
