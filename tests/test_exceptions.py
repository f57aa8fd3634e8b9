"""Tests for exception formatting."""

from moddex_bootstrap.exceptions import (
    BootstrapError,
    IntegrityError,
    ResolutionError,
    TransportError,
)


def test_message_with_target():
    error = ResolutionError("no tag", target="https://x/latest")

    assert str(error) == (
        "Version resolution failed for 'https://x/latest': no tag"
    )


def test_message_without_target():
    assert str(BootstrapError("boom")) == "Bootstrap failed: boom"


def test_transport_error_fields():
    error = TransportError("HTTP 404", url="https://x/a", status=404)

    assert error.url == "https://x/a"
    assert error.status == 404
    assert error.target == "https://x/a"
    assert isinstance(error, BootstrapError)


def test_integrity_error_includes_digests():
    error = IntegrityError("mismatch", expected="aa", actual="bb", target="f")

    assert str(error) == (
        "Integrity check failed for 'f': mismatch (expected aa, got bb)"
    )
