"""Tests for release asset naming."""

import pytest

from moddex_bootstrap.config import BootstrapConfig
from moddex_bootstrap.core.github import AssetLocator


@pytest.fixture
def locator() -> AssetLocator:
    return AssetLocator(BootstrapConfig())


def test_artifact_url_is_deterministic(locator):
    first = locator.locate("v1.2.3")
    second = locator.locate("v1.2.3")

    assert first == second
    assert first.artifact.filename == "moddex-v1.2.3-linux-amd64.tar.gz"
    assert first.artifact.url == (
        "https://github.com/aklozyp/Moddex/releases/download/v1.2.3/"
        "moddex-v1.2.3-linux-amd64.tar.gz"
    )


def test_tag_is_used_verbatim(locator):
    assets = locator.locate("2.0.0-rc.1")

    assert assets.artifact.filename == "moddex-2.0.0-rc.1-linux-amd64.tar.gz"


def test_manifest_candidates_in_order(locator):
    assets = locator.locate("v1.2.3")

    assert [m.filename for m in assets.manifests] == [
        "moddex-v1.2.3-linux-amd64.tar.gz.sha256",
        "moddex-v1.2.3-SHA256SUMS",
        "SHA256SUMS",
    ]
    assert assets.manifests[2].url.endswith(
        "/releases/download/v1.2.3/SHA256SUMS"
    )


def test_custom_repository_and_suffix():
    config = BootstrapConfig(
        owner="acme",
        repo="Fork",
        asset_suffix="-linux-arm64.tar.gz",
        github_url="http://mirror.local",
    )

    assets = AssetLocator(config).locate("v3")

    assert assets.artifact.url == (
        "http://mirror.local/acme/Fork/releases/download/v3/"
        "moddex-v3-linux-arm64.tar.gz"
    )
