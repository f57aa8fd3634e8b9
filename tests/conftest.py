"""Pytest configuration and fixtures for moddex-bootstrap tests."""

import hashlib
import io
import logging
import os
import tarfile
import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from moddex_bootstrap.constants import LOG_DIR_ENV

# Logging is initialized at import time; keep test logs out of $HOME
os.environ.setdefault(
    LOG_DIR_ENV, tempfile.mkdtemp(prefix="moddex-bootstrap-test-logs-")
)

from moddex_bootstrap.config import BootstrapConfig  # noqa: E402
from moddex_bootstrap.core.transport import Transport  # noqa: E402
from moddex_bootstrap.exceptions import TransportError  # noqa: E402


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    This allows pytest's caplog fixture to capture logs from all loggers,
    even those created with propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("moddex_bootstrap"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


class FakeTransport(Transport):
    """In-memory transport serving canned bodies and redirects.

    ``responses`` maps a URL to bytes, or to a TransportError to raise.
    Unknown URLs answer 404. Every request URL is recorded in ``calls``.
    """

    name = "fake"

    def __init__(self, retry_attempts: int = 1) -> None:
        super().__init__(retry_attempts=retry_attempts, timeout_seconds=1)
        self.responses: dict[str, bytes | TransportError] = {}
        self.redirects: dict[str, str | TransportError] = {}
        self.headers: dict[str, dict[str, str]] = {}
        self.calls: list[str] = []

    def _answer(self, url: str) -> bytes:
        self.calls.append(url)
        response = self.responses.get(url)
        if response is None:
            raise TransportError("HTTP 404", url=url, status=404)
        if isinstance(response, TransportError):
            raise response
        return response

    def _fetch_bytes_once(self, url, headers):
        self.headers[url] = headers
        return self._answer(url)

    def _fetch_to_file_once(self, url, path, headers):
        self.headers[url] = headers
        body = self._answer(url)
        path.write_bytes(body)

    def _resolve_redirect_once(self, url):
        self.calls.append(url)
        target = self.redirects.get(url)
        if target is None:
            raise TransportError("HTTP 404", url=url, status=404)
        if isinstance(target, TransportError):
            raise target
        return target


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Create an empty in-memory transport."""
    return FakeTransport()


@pytest.fixture
def make_tarball(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory building a .tar.gz from a {path: content} mapping."""

    def factory(files: dict[str, str], name: str = "bundle.tar.gz") -> Path:
        archive_path = tmp_path / "archives" / name
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        with tarfile.open(archive_path, "w:gz") as archive:
            for member_name, content in files.items():
                data = content.encode()
                info = tarfile.TarInfo(member_name)
                info.size = len(data)
                info.mode = 0o644
                archive.addfile(info, io.BytesIO(data))
        return archive_path

    return factory


@pytest.fixture
def sha256() -> Callable[[Path], str]:
    """Return a helper computing the SHA-256 hex digest of a file."""

    def digest(path: Path) -> str:
        return hashlib.sha256(path.read_bytes()).hexdigest()

    return digest


@pytest.fixture
def config(tmp_path: Path) -> BootstrapConfig:
    """Configuration pinned to v1.2.3 with an isolated workspace root."""
    return BootstrapConfig(
        version="v1.2.3",
        auto_run=False,
        install_dir=tmp_path / "install",
        workspace_root=tmp_path / "workspaces",
        installed_version_file=tmp_path / "VERSION",
    )
