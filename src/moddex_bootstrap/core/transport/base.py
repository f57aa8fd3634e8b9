"""Transport base class shared by the HTTP client backends.

A transport offers three blocking operations:

- fetch_bytes(): GET a URL and return the body
- fetch_to_file(): GET a URL and stream the body into a file
- resolve_redirect(): HEAD a URL, follow redirects, return the final URL

Backends only implement a single attempt of each operation and translate
their library's exceptions into TransportError. Retry with exponential
backoff lives here so both backends behave the same way.
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

from moddex_bootstrap import __version__
from moddex_bootstrap.constants import (
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    HTTP_SERVER_ERROR,
    USER_AGENT_TEMPLATE,
)
from moddex_bootstrap.exceptions import TransportError
from moddex_bootstrap.logger import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


def is_retryable(error: TransportError) -> bool:
    """Return True for connection failures and 5xx answers.

    Client errors (4xx) are never retried.
    """
    return error.status is None or error.status >= HTTP_SERVER_ERROR


class Transport(ABC):
    """Blocking HTTP transport with bounded retry."""

    name: str = "transport"

    def __init__(
        self,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize transport.

        Args:
            retry_attempts: Total attempts per request (1 means no retry)
            timeout_seconds: Per-request timeout

        """
        self.retry_attempts = max(1, retry_attempts)
        self.timeout_seconds = timeout_seconds
        self.user_agent = USER_AGENT_TEMPLATE.format(version=__version__)

    def fetch_bytes(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> bytes:
        """Fetch ``url`` and return the response body.

        Raises:
            TransportError: On connection failure or HTTP error status

        """
        logger.debug("Fetching %s", url)
        return self._with_retry(
            url, lambda: self._fetch_bytes_once(url, dict(headers or {}))
        )

    def fetch_to_file(
        self,
        url: str,
        path: Path,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Download ``url`` into ``path``.

        A partially written file is removed before the error propagates.

        Raises:
            TransportError: On connection failure or HTTP error status

        """

        def cleanup() -> None:
            if path.exists():
                logger.debug("Removing partial download: %s", path)
                path.unlink(missing_ok=True)

        logger.debug("Downloading %s -> %s", url, path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._with_retry(
            url,
            lambda: self._fetch_to_file_once(url, path, dict(headers or {})),
            cleanup=cleanup,
        )
        logger.debug("Download completed: %s", path)

    def resolve_redirect(self, url: str) -> str:
        """Follow redirects from ``url`` and return the final URL.

        Raises:
            TransportError: On connection failure or HTTP error status

        """
        logger.debug("Resolving redirect for %s", url)
        return self._with_retry(url, lambda: self._resolve_redirect_once(url))

    def _with_retry(
        self,
        url: str,
        operation: Callable[[], T],
        cleanup: Callable[[], None] | None = None,
    ) -> T:
        """Run ``operation`` with exponential backoff between attempts."""
        for attempt in range(1, self.retry_attempts + 1):
            try:
                return operation()
            except TransportError as e:
                if cleanup:
                    cleanup()
                if not is_retryable(e) or attempt == self.retry_attempts:
                    raise
                logger.warning(
                    "Attempt %s/%s failed for %s: %s",
                    attempt,
                    self.retry_attempts,
                    url,
                    e.message,
                )
                backoff = 2**attempt
                logger.info("Retrying in %s seconds...", backoff)
                time.sleep(backoff)

        msg = "no attempts were made"
        raise TransportError(msg, url=url)

    @abstractmethod
    def _fetch_bytes_once(self, url: str, headers: dict[str, str]) -> bytes:
        """Perform a single GET and return the body."""

    @abstractmethod
    def _fetch_to_file_once(
        self, url: str, path: Path, headers: dict[str, str]
    ) -> None:
        """Perform a single streamed GET into ``path``."""

    @abstractmethod
    def _resolve_redirect_once(self, url: str) -> str:
        """Perform a single HEAD that follows redirects."""
