"""Release asset naming and URL construction.

Everything here is a pure function of the configuration and the release
version; no network access happens in this module.
"""

from dataclasses import dataclass

from moddex_bootstrap.config import BootstrapConfig
from moddex_bootstrap.constants import (
    GLOBAL_MANIFEST_NAME,
    SIBLING_MANIFEST_EXTENSION,
    VERSIONED_MANIFEST_TEMPLATE,
)


@dataclass(frozen=True, slots=True)
class AssetReference:
    """A downloadable release asset."""

    url: str
    filename: str


@dataclass(frozen=True, slots=True)
class ReleaseAssets:
    """The artifact of a release and its manifest candidates, in order."""

    version: str
    artifact: AssetReference
    manifests: tuple[AssetReference, ...]


class AssetLocator:
    """Computes artifact and manifest locations for a release."""

    def __init__(self, config: BootstrapConfig) -> None:
        """Initialize locator from configuration."""
        self.github_url = config.github_url
        self.owner = config.owner
        self.repo = config.repo
        self.prefix = config.asset_prefix
        self.suffix = config.asset_suffix

    def artifact_filename(self, version: str) -> str:
        """Return ``<prefix>-<version><suffix>``; the tag is used verbatim."""
        return f"{self.prefix}-{version}{self.suffix}"

    def download_url(self, version: str, filename: str) -> str:
        """Return the release download URL of ``filename``."""
        return (
            f"{self.github_url}/{self.owner}/{self.repo}"
            f"/releases/download/{version}/{filename}"
        )

    def manifest_filenames(self, version: str) -> tuple[str, ...]:
        """Return manifest names in the order they should be tried."""
        artifact = self.artifact_filename(version)
        return (
            f"{artifact}{SIBLING_MANIFEST_EXTENSION}",
            VERSIONED_MANIFEST_TEMPLATE.format(
                prefix=self.prefix, version=version
            ),
            GLOBAL_MANIFEST_NAME,
        )

    def locate(self, version: str) -> ReleaseAssets:
        """Return the artifact and manifest references for ``version``.

        Example:
            >>> locator.locate("v1.2.3").artifact.filename
            'moddex-v1.2.3-linux-amd64.tar.gz'

        """
        filename = self.artifact_filename(version)
        artifact = AssetReference(
            url=self.download_url(version, filename), filename=filename
        )
        manifests = tuple(
            AssetReference(url=self.download_url(version, name), filename=name)
            for name in self.manifest_filenames(version)
        )
        return ReleaseAssets(
            version=version, artifact=artifact, manifests=manifests
        )
