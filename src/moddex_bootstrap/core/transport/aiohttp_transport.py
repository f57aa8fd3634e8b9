"""Transport backed by aiohttp, driven on a uvloop event loop.

Each operation creates its own ClientSession and runs to completion on a
fresh loop, so callers see the same blocking interface as the requests
backend.
"""

from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any, TypeVar

import aiohttp
import uvloop

from moddex_bootstrap.constants import (
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    DOWNLOAD_CHUNK_SIZE,
)
from moddex_bootstrap.core.transport.base import Transport
from moddex_bootstrap.exceptions import TransportError

T = TypeVar("T")

SessionFactory = Callable[[], aiohttp.ClientSession]


class AiohttpTransport(Transport):
    """Blocking facade over aiohttp requests."""

    name = "aiohttp"

    def __init__(
        self,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        session_factory: SessionFactory | None = None,
    ) -> None:
        """Initialize transport.

        Args:
            retry_attempts: Total attempts per request
            timeout_seconds: Per-request timeout
            session_factory: Callable returning a ClientSession (tests)

        """
        super().__init__(retry_attempts, timeout_seconds)
        self.session_factory = session_factory or self._create_session

    def _create_session(self) -> aiohttp.ClientSession:
        timeout = aiohttp.ClientTimeout(
            total=self.timeout_seconds * 60,
            sock_read=self.timeout_seconds,
            sock_connect=self.timeout_seconds,
        )
        return aiohttp.ClientSession(
            timeout=timeout, headers={"User-Agent": self.user_agent}
        )

    def _run(self, url: str, coro: Coroutine[Any, Any, T]) -> T:
        """Run ``coro`` on uvloop, translating aiohttp errors."""
        try:
            return uvloop.run(coro)
        except aiohttp.ClientResponseError as e:
            msg = f"HTTP {e.status}"
            raise TransportError(msg, url=url, status=e.status) from e
        except (aiohttp.ClientError, TimeoutError) as e:
            msg = str(e) or type(e).__name__
            raise TransportError(msg, url=url) from e

    def _fetch_bytes_once(self, url: str, headers: dict[str, str]) -> bytes:
        async def fetch() -> bytes:
            async with (
                self.session_factory() as session,
                session.get(url, headers=headers) as response,
            ):
                response.raise_for_status()
                return await response.read()

        return self._run(url, fetch())

    def _fetch_to_file_once(
        self, url: str, path: Path, headers: dict[str, str]
    ) -> None:
        async def fetch() -> None:
            async with (
                self.session_factory() as session,
                session.get(url, headers=headers) as response,
            ):
                response.raise_for_status()
                with path.open("wb") as f:
                    async for chunk in response.content.iter_chunked(
                        DOWNLOAD_CHUNK_SIZE
                    ):
                        if chunk:
                            f.write(chunk)

        self._run(url, fetch())

    def _resolve_redirect_once(self, url: str) -> str:
        async def resolve() -> str:
            async with (
                self.session_factory() as session,
                session.head(url, allow_redirects=True) as response,
            ):
                response.raise_for_status()
                return str(response.url)

        return self._run(url, resolve())
