"""Tests for the installed-version check."""

import pytest

from moddex_bootstrap.core import UpdateChecker
from moddex_bootstrap.core.github import VersionResolver
from moddex_bootstrap.exceptions import ConfigurationError

LATEST_URL = "https://github.com/aklozyp/Moddex/releases/latest"


@pytest.fixture
def checker(config, fake_transport):
    fake_transport.redirects[LATEST_URL] = (
        "https://github.com/aklozyp/Moddex/releases/tag/v2.0.0"
    )
    return UpdateChecker(config, VersionResolver(config, fake_transport))


def test_not_installed(checker):
    status = checker.check()

    assert status.state == "not-installed"
    assert status.installed is None
    assert status.latest == "v2.0.0"
    assert status.needs_update is True


def test_up_to_date(checker, config):
    config.installed_version_file.write_text("v2.0.0\nbuilt 2026-01-01\n")

    status = checker.check()

    assert status.state == "up-to-date"
    assert status.installed == "v2.0.0"
    assert status.needs_update is False


def test_update_available(checker, config):
    config.installed_version_file.write_text("v1.9.0\n")

    assert checker.check().state == "update-available"


def test_latest_ignores_pinned_version(checker, config):
    # config pins v1.2.3; the check still asks for the newest release
    config.installed_version_file.write_text("v1.2.3\n")

    assert checker.check().latest == "v2.0.0"


def test_blank_version_file_is_unknown(checker, config):
    config.installed_version_file.write_text("\n")

    status = checker.check()

    assert status.installed == "unknown"
    assert status.state == "update-available"


def test_unreadable_version_file(checker, config):
    config.installed_version_file.mkdir()

    with pytest.raises(ConfigurationError):
        checker.check()


def test_app_jar_without_version_file_is_installed(checker, config):
    (config.installed_version_file.parent / "app.jar").write_bytes(b"PK")

    status = checker.check()

    assert status.installed == "unknown"
    assert status.state == "update-available"
