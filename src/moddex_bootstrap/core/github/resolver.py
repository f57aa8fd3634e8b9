"""Determine which release to install.

A pinned version is used verbatim. Otherwise the latest release is
discovered with one of two strategies:

- redirect: HEAD ``<github>/<owner>/<repo>/releases/latest`` and read the
  tag from the final ``.../releases/tag/<tag>`` URL
- api: GET ``<api>/repos/<owner>/<repo>/releases/latest`` and read
  ``tag_name`` (or derive it from the asset names)
"""

from typing import Any
from urllib.parse import unquote, urlparse

import orjson

from moddex_bootstrap.config import BootstrapConfig
from moddex_bootstrap.constants import GITHUB_API_ACCEPT
from moddex_bootstrap.core.github.version_utils import tag_from_asset_name
from moddex_bootstrap.core.transport import Transport
from moddex_bootstrap.exceptions import ResolutionError, TransportError
from moddex_bootstrap.logger import get_logger

logger = get_logger(__name__)


class VersionResolver:
    """Resolves the release version for a run."""

    def __init__(self, config: BootstrapConfig, transport: Transport) -> None:
        """Initialize resolver.

        Args:
            config: Run configuration
            transport: Transport used for discovery requests

        """
        self.config = config
        self.transport = transport

    @property
    def latest_url(self) -> str:
        """Web URL that redirects to the latest release."""
        return (
            f"{self.config.github_url}/{self.config.owner}"
            f"/{self.config.repo}/releases/latest"
        )

    @property
    def api_latest_url(self) -> str:
        """REST API URL of the latest release."""
        return (
            f"{self.config.api_url}/repos/{self.config.owner}"
            f"/{self.config.repo}/releases/latest"
        )

    def resolve(self) -> str:
        """Return the pinned version or discover the latest one.

        Raises:
            ResolutionError: If no version can be determined

        """
        pinned = self.config.pinned_version
        if pinned is not None:
            logger.info("Using pinned version %s", pinned)
            return pinned
        return self.resolve_latest()

    def resolve_latest(self) -> str:
        """Discover the latest release tag with the configured strategy."""
        logger.info(
            "Resolving latest release of %s/%s",
            self.config.owner,
            self.config.repo,
        )
        if self.config.resolver == "api":
            version = self._resolve_via_api()
        else:
            version = self._resolve_via_redirect()
        logger.info("Latest release: %s", version)
        return version

    def _resolve_via_redirect(self) -> str:
        try:
            final_url = self.transport.resolve_redirect(self.latest_url)
        except TransportError as e:
            msg = f"could not reach the latest release page: {e}"
            raise ResolutionError(msg, target=self.latest_url) from e

        logger.debug("Latest release redirected to %s", final_url)
        return self.tag_from_release_url(final_url)

    @staticmethod
    def tag_from_release_url(url: str) -> str:
        """Return ``<tag>`` from a ``.../releases/tag/<tag>`` URL.

        Raises:
            ResolutionError: If the URL does not point at a release tag

        """
        segments = [s for s in urlparse(url).path.split("/") if s]
        if len(segments) < 2 or segments[-2] != "tag":
            msg = "redirect did not point at a release tag"
            raise ResolutionError(msg, target=url)
        return unquote(segments[-1])

    def _api_headers(self) -> dict[str, str]:
        headers = {"Accept": GITHUB_API_ACCEPT}
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    def _resolve_via_api(self) -> str:
        url = self.api_latest_url
        try:
            body = self.transport.fetch_bytes(url, headers=self._api_headers())
        except TransportError as e:
            msg = f"release API request failed: {e}"
            raise ResolutionError(msg, target=url) from e

        try:
            release = orjson.loads(body)
        except orjson.JSONDecodeError as e:
            msg = f"release API returned invalid JSON: {e}"
            raise ResolutionError(msg, target=url) from e

        if not isinstance(release, dict):
            msg = "release API returned an unexpected document"
            raise ResolutionError(msg, target=url)

        return self._tag_from_release(release, url)

    def _tag_from_release(self, release: dict[str, Any], url: str) -> str:
        tag = release.get("tag_name")
        if isinstance(tag, str) and tag.strip():
            return tag.strip()

        for asset in release.get("assets") or []:
            name = asset.get("name") if isinstance(asset, dict) else None
            if not isinstance(name, str):
                continue
            derived = tag_from_asset_name(
                name, self.config.asset_prefix, self.config.asset_suffix
            )
            if derived:
                logger.debug("Derived tag %s from asset %s", derived, name)
                return derived

        msg = "release has no tag_name and no matching asset"
        raise ResolutionError(msg, target=url)
