"""Tests for release version resolution."""

import orjson
import pytest

from moddex_bootstrap.config import BootstrapConfig
from moddex_bootstrap.core.github import VersionResolver
from moddex_bootstrap.exceptions import ResolutionError, TransportError

LATEST_URL = "https://github.com/aklozyp/Moddex/releases/latest"
API_URL = "https://api.github.com/repos/aklozyp/Moddex/releases/latest"


class TestPinned:
    """A pinned version never touches the network."""

    def test_pinned_version_returned_verbatim(self, fake_transport):
        resolver = VersionResolver(
            BootstrapConfig(version="v1.2.3"), fake_transport
        )

        assert resolver.resolve() == "v1.2.3"
        assert fake_transport.calls == []

    def test_latest_alias_triggers_discovery(self, fake_transport):
        fake_transport.redirects[LATEST_URL] = (
            "https://github.com/aklozyp/Moddex/releases/tag/v2.0.0"
        )
        resolver = VersionResolver(
            BootstrapConfig(version="latest"), fake_transport
        )

        assert resolver.resolve() == "v2.0.0"


class TestRedirectStrategy:
    """Latest release discovered through the web redirect."""

    def test_redirect_to_tag(self, fake_transport):
        fake_transport.redirects[LATEST_URL] = (
            "https://github.com/aklozyp/Moddex/releases/tag/v2.0.0"
        )

        version = VersionResolver(BootstrapConfig(), fake_transport).resolve()

        assert version == "v2.0.0"

    def test_redirect_without_tag_segment(self, fake_transport):
        fake_transport.redirects[LATEST_URL] = (
            "https://github.com/aklozyp/Moddex/releases"
        )

        with pytest.raises(ResolutionError, match="release tag"):
            VersionResolver(BootstrapConfig(), fake_transport).resolve()

    def test_redirect_not_followed_to_a_tag(self, fake_transport):
        # No release published: the latest URL stays where it was
        fake_transport.redirects[LATEST_URL] = LATEST_URL

        with pytest.raises(ResolutionError):
            VersionResolver(BootstrapConfig(), fake_transport).resolve()

    def test_transport_failure_is_wrapped(self, fake_transport):
        error = TransportError("connection refused", url=LATEST_URL)
        fake_transport.redirects[LATEST_URL] = error

        with pytest.raises(ResolutionError) as exc_info:
            VersionResolver(BootstrapConfig(), fake_transport).resolve()

        assert exc_info.value.__cause__ is error

    def test_tag_from_release_url_unquotes(self):
        url = "https://github.com/o/r/releases/tag/release%2F1.0"

        assert VersionResolver.tag_from_release_url(url) == "release/1.0"


class TestApiStrategy:
    """Latest release discovered through the REST API."""

    @pytest.fixture
    def api_config(self) -> BootstrapConfig:
        return BootstrapConfig(resolver="api")

    def test_tag_name(self, fake_transport, api_config):
        fake_transport.responses[API_URL] = orjson.dumps(
            {"tag_name": "v3.1.0", "assets": []}
        )

        version = VersionResolver(api_config, fake_transport).resolve()

        assert version == "v3.1.0"

    def test_tag_derived_from_asset_name(self, fake_transport, api_config):
        fake_transport.responses[API_URL] = orjson.dumps(
            {
                "assets": [
                    {"name": "SHA256SUMS"},
                    {"name": "moddex-v3.2.0-linux-amd64.tar.gz"},
                ]
            }
        )

        version = VersionResolver(api_config, fake_transport).resolve()

        assert version == "v3.2.0"

    def test_invalid_json(self, fake_transport, api_config):
        fake_transport.responses[API_URL] = b"<html>rate limited</html>"

        with pytest.raises(ResolutionError, match="invalid JSON"):
            VersionResolver(api_config, fake_transport).resolve()

    def test_no_tag_and_no_matching_asset(self, fake_transport, api_config):
        fake_transport.responses[API_URL] = orjson.dumps(
            {"assets": [{"name": "other-file.zip"}]}
        )

        with pytest.raises(ResolutionError, match="no tag_name"):
            VersionResolver(api_config, fake_transport).resolve()

    def test_non_object_document(self, fake_transport, api_config):
        fake_transport.responses[API_URL] = b"[]"

        with pytest.raises(ResolutionError, match="unexpected document"):
            VersionResolver(api_config, fake_transport).resolve()

    def test_token_sent_as_bearer(self, fake_transport):
        config = BootstrapConfig(resolver="api", github_token="ghp_x")
        fake_transport.responses[API_URL] = orjson.dumps({"tag_name": "v1"})

        VersionResolver(config, fake_transport).resolve()

        headers = fake_transport.headers[API_URL]
        assert headers["Authorization"] == "Bearer ghp_x"
        assert headers["Accept"] == "application/vnd.github+json"

    def test_no_authorization_without_token(self, fake_transport, api_config):
        fake_transport.responses[API_URL] = orjson.dumps({"tag_name": "v1"})

        VersionResolver(api_config, fake_transport).resolve()

        assert "Authorization" not in fake_transport.headers[API_URL]

    def test_http_error_is_wrapped(self, fake_transport, api_config):
        fake_transport.responses[API_URL] = TransportError(
            "HTTP 403", url=API_URL, status=403
        )

        with pytest.raises(ResolutionError, match="HTTP 403"):
            VersionResolver(api_config, fake_transport).resolve()
