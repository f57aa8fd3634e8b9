"""Tests for the integrity verifier."""

from pathlib import Path

import pytest

from moddex_bootstrap.config import BootstrapConfig
from moddex_bootstrap.core.github import AssetLocator
from moddex_bootstrap.core.verification import (
    IntegrityVerifier,
    compute_hash,
)
from moddex_bootstrap.exceptions import IntegrityError, TransportError

FILENAME = "moddex-v1.2.3-linux-amd64.tar.gz"


@pytest.fixture
def assets():
    return AssetLocator(BootstrapConfig()).locate("v1.2.3")


@pytest.fixture
def artifact(tmp_path: Path) -> Path:
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    path = workspace / FILENAME
    path.write_bytes(b"moddex bundle bytes")
    return path


def entry(digest: str, name: str = FILENAME) -> bytes:
    return f"{digest}  {name}\n".encode()


def serve(transport, assets, index: int, body: bytes) -> None:
    transport.responses[assets.manifests[index].url] = body


class TestVerification:
    """Digest comparison."""

    def test_round_trip(self, fake_transport, assets, artifact, sha256):
        serve(fake_transport, assets, 1, entry(sha256(artifact)))

        result = IntegrityVerifier(fake_transport).verify(
            artifact, FILENAME, assets.manifests
        )

        assert result.verified is True
        assert result.expected == sha256(artifact)
        assert result.actual == sha256(artifact)
        assert result.manifest_url == assets.manifests[1].url

    def test_single_character_change_fails(
        self, fake_transport, assets, artifact, sha256
    ):
        digest = sha256(artifact)
        corrupted = ("0" if digest[0] != "0" else "1") + digest[1:]
        serve(fake_transport, assets, 1, entry(corrupted))

        with pytest.raises(IntegrityError) as exc_info:
            IntegrityVerifier(fake_transport).verify(
                artifact, FILENAME, assets.manifests
            )

        error = exc_info.value
        assert error.message == "mismatch"
        assert error.expected == corrupted
        assert error.actual == digest
        assert "expected" in str(error)

    def test_uppercase_manifest_digest(
        self, fake_transport, assets, artifact, sha256
    ):
        line = f"{sha256(artifact).upper()}  {FILENAME}\n"
        serve(fake_transport, assets, 0, line.encode())

        result = IntegrityVerifier(fake_transport).verify(
            artifact, FILENAME, assets.manifests
        )

        assert result.verified is True

    def test_sibling_manifest_with_bare_digest(
        self, fake_transport, assets, artifact, sha256
    ):
        serve(fake_transport, assets, 0, f"{sha256(artifact)}\n".encode())

        result = IntegrityVerifier(fake_transport).verify(
            artifact, FILENAME, assets.manifests
        )

        assert result.verified is True
        assert result.manifest_url == assets.manifests[0].url

    def test_manifest_is_stored_in_workspace(
        self, fake_transport, assets, artifact, sha256
    ):
        serve(fake_transport, assets, 2, entry(sha256(artifact)))

        IntegrityVerifier(fake_transport).verify(
            artifact, FILENAME, assets.manifests
        )

        assert (artifact.parent / "SHA256SUMS").exists()


class TestManifestFallback:
    """Candidate order and availability."""

    def test_falls_back_after_404(
        self, fake_transport, assets, artifact, sha256
    ):
        serve(fake_transport, assets, 2, entry(sha256(artifact)))

        result = IntegrityVerifier(fake_transport).verify(
            artifact, FILENAME, assets.manifests
        )

        assert result.manifest_url == assets.manifests[2].url
        assert fake_transport.calls == [m.url for m in assets.manifests]

    def test_empty_manifest_counts_as_unavailable(
        self, fake_transport, assets, artifact, sha256
    ):
        serve(fake_transport, assets, 0, b"  \n")
        serve(fake_transport, assets, 1, entry(sha256(artifact)))

        result = IntegrityVerifier(fake_transport).verify(
            artifact, FILENAME, assets.manifests
        )

        assert result.manifest_url == assets.manifests[1].url

    def test_missing_entry_is_fatal_without_fallback(
        self, fake_transport, assets, artifact, sha256
    ):
        other = "moddex-v1.2.4-linux-amd64.tar.gz"
        serve(fake_transport, assets, 1, entry(sha256(artifact), other))
        serve(fake_transport, assets, 2, entry(sha256(artifact)))

        with pytest.raises(IntegrityError, match="no matching entry"):
            IntegrityVerifier(fake_transport, lenient=True).verify(
                artifact, FILENAME, assets.manifests
            )

        assert assets.manifests[2].url not in fake_transport.calls

    def test_all_unavailable_strict(self, fake_transport, assets, artifact):
        with pytest.raises(IntegrityError, match="manifest unavailable"):
            IntegrityVerifier(fake_transport).verify(
                artifact, FILENAME, assets.manifests
            )

    def test_network_failure_strict_chains_cause(
        self, fake_transport, assets, artifact
    ):
        error = TransportError("connection reset")
        for manifest in assets.manifests:
            fake_transport.responses[manifest.url] = error

        with pytest.raises(IntegrityError) as exc_info:
            IntegrityVerifier(fake_transport).verify(
                artifact, FILENAME, assets.manifests
            )

        assert exc_info.value.__cause__ is error

    def test_all_unavailable_lenient(
        self, fake_transport, assets, artifact, caplog
    ):
        result = IntegrityVerifier(fake_transport, lenient=True).verify(
            artifact, FILENAME, assets.manifests
        )

        assert result.verified is False
        assert result.warning
        assert "UNVERIFIED" in caplog.text

    def test_lenient_still_rejects_mismatch(
        self, fake_transport, assets, artifact
    ):
        serve(fake_transport, assets, 0, entry("0" * 64))

        with pytest.raises(IntegrityError, match="mismatch"):
            IntegrityVerifier(fake_transport, lenient=True).verify(
                artifact, FILENAME, assets.manifests
            )


def test_compute_hash_known_value(tmp_path: Path):
    path = tmp_path / "file"
    path.write_bytes(b"test content")

    assert compute_hash(path) == (
        "6ae8a75555209fd6c44157c0aed8016e763ff435a19cf186f76863140143ff72"
    )


def test_compute_hash_rejects_unknown_algorithm(tmp_path: Path):
    path = tmp_path / "file"
    path.write_bytes(b"x")

    with pytest.raises(ValueError, match="Unsupported"):
        compute_hash(path, "md5")  # type: ignore[arg-type]
