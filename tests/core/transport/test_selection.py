"""Tests for transport backend selection."""

from unittest.mock import patch

import pytest

from moddex_bootstrap.config import BootstrapConfig
from moddex_bootstrap.core.transport import select_transport
from moddex_bootstrap.exceptions import ToolMissingError


@pytest.fixture
def installed():
    """Pretend only the given modules are installed."""

    def factory(*modules):
        def find_spec(name):
            return object() if name in modules else None

        return patch(
            "moddex_bootstrap.core.transport.selection.find_spec",
            side_effect=find_spec,
        )

    return factory


def test_auto_prefers_requests(installed):
    with installed("requests", "aiohttp", "uvloop"):
        transport = select_transport(BootstrapConfig())

    assert transport.name == "requests"


def test_auto_falls_back_to_aiohttp(installed):
    with installed("aiohttp", "uvloop"):
        transport = select_transport(BootstrapConfig())

    assert transport.name == "aiohttp"


def test_aiohttp_needs_uvloop(installed):
    with installed("aiohttp"), pytest.raises(ToolMissingError):
        select_transport(BootstrapConfig())


def test_nothing_installed(installed):
    with installed(), pytest.raises(ToolMissingError) as exc_info:
        select_transport(BootstrapConfig())

    assert "install requests or aiohttp" in str(exc_info.value)


def test_explicit_choice_is_honoured(installed):
    config = BootstrapConfig(transport="aiohttp")

    with installed("requests", "aiohttp", "uvloop"):
        transport = select_transport(config)

    assert transport.name == "aiohttp"


def test_explicit_choice_missing(installed):
    config = BootstrapConfig(transport="requests")

    with installed("aiohttp", "uvloop"), pytest.raises(ToolMissingError):
        select_transport(config)


def test_network_settings_are_passed_through(installed):
    config = BootstrapConfig(retry_attempts=4, timeout_seconds=9)

    with installed("requests"):
        transport = select_transport(config)

    assert transport.retry_attempts == 4
    assert transport.timeout_seconds == 9
