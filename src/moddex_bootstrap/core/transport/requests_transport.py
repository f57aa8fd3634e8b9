"""Transport backed by the requests library (preferred backend)."""

from pathlib import Path

import requests

from moddex_bootstrap.constants import (
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    DOWNLOAD_CHUNK_SIZE,
)
from moddex_bootstrap.core.transport.base import Transport
from moddex_bootstrap.exceptions import TransportError


def _raise_for_status(response: requests.Response, url: str) -> None:
    try:
        response.raise_for_status()
    except requests.HTTPError as e:
        status = response.status_code
        msg = f"HTTP {status}"
        raise TransportError(msg, url=url, status=status) from e


class RequestsTransport(Transport):
    """Blocking transport using a shared requests.Session."""

    name = "requests"

    def __init__(
        self,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize transport.

        Args:
            retry_attempts: Total attempts per request
            timeout_seconds: Per-request timeout
            session: Optional pre-built session (used by tests)

        """
        super().__init__(retry_attempts, timeout_seconds)
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = self.user_agent

    def _fetch_bytes_once(self, url: str, headers: dict[str, str]) -> bytes:
        try:
            response = self.session.get(
                url, headers=headers, timeout=self.timeout_seconds
            )
        except requests.RequestException as e:
            raise TransportError(str(e), url=url) from e
        _raise_for_status(response, url)
        return response.content

    def _fetch_to_file_once(
        self, url: str, path: Path, headers: dict[str, str]
    ) -> None:
        try:
            response = self.session.get(
                url, headers=headers, timeout=self.timeout_seconds, stream=True
            )
        except requests.RequestException as e:
            raise TransportError(str(e), url=url) from e
        try:
            _raise_for_status(response, url)
            with path.open("wb") as f:
                for chunk in response.iter_content(
                    chunk_size=DOWNLOAD_CHUNK_SIZE
                ):
                    if chunk:
                        f.write(chunk)
        except requests.RequestException as e:
            raise TransportError(str(e), url=url) from e
        finally:
            response.close()

    def _resolve_redirect_once(self, url: str) -> str:
        try:
            response = self.session.head(
                url, allow_redirects=True, timeout=self.timeout_seconds
            )
        except requests.RequestException as e:
            raise TransportError(str(e), url=url) from e
        _raise_for_status(response, url)
        return str(response.url)
