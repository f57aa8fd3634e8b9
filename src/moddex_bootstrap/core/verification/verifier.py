"""Integrity gate between download and extraction.

The verifier fetches checksum manifests in candidate order, looks up the
entry for the artifact and compares digests. It fails closed: a missing
entry or a mismatch always raises IntegrityError. The only soft path is a
run configured for lenient verification when no manifest can be fetched.
"""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

from moddex_bootstrap.constants import (
    HASH_CHUNK_SIZE,
    HTTP_NOT_FOUND,
    SIBLING_MANIFEST_EXTENSION,
    SUPPORTED_HASH_ALGORITHMS,
    HashType,
)
from moddex_bootstrap.core.verification.checksum_parser import (
    find_checksum_entry,
)
from moddex_bootstrap.core.verification.results import VerificationResult
from moddex_bootstrap.exceptions import IntegrityError, TransportError
from moddex_bootstrap.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from moddex_bootstrap.core.github.assets import AssetReference
    from moddex_bootstrap.core.transport import Transport
    from moddex_bootstrap.core.verification.checksum_parser import (
        ChecksumEntry,
    )

logger = get_logger(__name__)

UNVERIFIED_WARNING = (
    "No checksum manifest could be fetched; installing UNVERIFIED bytes. "
    "A tampered or corrupted download would not be detected."
)


def compute_hash(path: Path, algorithm: HashType = "sha256") -> str:
    """Compute the hex digest of ``path`` in chunks.

    Raises:
        ValueError: If the algorithm is not supported

    """
    if algorithm not in SUPPORTED_HASH_ALGORITHMS:
        msg = f"Unsupported hash algorithm: {algorithm}"
        raise ValueError(msg)

    hasher = hashlib.new(algorithm)
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


class IntegrityVerifier:
    """Verifies a downloaded artifact against its checksum manifest."""

    def __init__(
        self,
        transport: Transport,
        lenient: bool = False,  # noqa: FBT001, FBT002
    ) -> None:
        """Initialize verifier.

        Args:
            transport: Transport used to fetch manifests
            lenient: Proceed with a warning when no manifest is available

        """
        self.transport = transport
        self.lenient = lenient

    def verify(
        self,
        artifact_path: Path,
        artifact_filename: str,
        manifests: Sequence[AssetReference],
    ) -> VerificationResult:
        """Verify ``artifact_path`` against the first available manifest.

        Manifests are downloaded next to the artifact, so they share its
        workspace lifetime.

        Args:
            artifact_path: Downloaded artifact
            artifact_filename: Name to look up in the manifest
            manifests: Candidates, tried in order

        Returns:
            VerificationResult (unverified only under the lenient policy)

        Raises:
            IntegrityError: On a missing entry, a digest mismatch, or an
                unavailable manifest under the strict policy

        """
        sibling_name = f"{artifact_filename}{SIBLING_MANIFEST_EXTENSION}"
        last_error: TransportError | None = None

        for manifest in manifests:
            try:
                content = self._fetch_manifest(manifest, artifact_path.parent)
            except TransportError as e:
                last_error = e
                continue
            if content is None:
                continue

            entry = find_checksum_entry(
                content,
                artifact_filename,
                allow_bare_digest=manifest.filename == sibling_name,
            )
            if entry is None:
                logger.error(
                    "Manifest %s has no entry for %s",
                    manifest.filename,
                    artifact_filename,
                )
                raise IntegrityError(
                    "no matching entry", target=artifact_filename
                )

            return self._compare(artifact_path, entry, manifest.url)

        return self._handle_unavailable(artifact_filename, last_error)

    def _fetch_manifest(
        self, manifest: AssetReference, directory: Path
    ) -> str | None:
        """Download a manifest; None means unavailable (404 or empty).

        Raises:
            TransportError: For failures other than 404
        """
        dest = directory / manifest.filename
        logger.info("Fetching checksum manifest %s", manifest.filename)
        try:
            self.transport.fetch_to_file(manifest.url, dest)
        except TransportError as e:
            if e.status == HTTP_NOT_FOUND:
                logger.debug("Manifest not published: %s", manifest.url)
                return None
            logger.warning(
                "Could not fetch manifest %s: %s", manifest.filename, e
            )
            raise

        content = dest.read_text(encoding="utf-8", errors="replace")
        if not content.strip():
            logger.debug("Manifest is empty: %s", manifest.url)
            return None
        return content

    def _compare(
        self, artifact_path: Path, entry: ChecksumEntry, manifest_url: str
    ) -> VerificationResult:
        logger.debug("Computing %s of %s", entry.algorithm, artifact_path)
        actual = compute_hash(artifact_path, entry.algorithm)
        expected = entry.hash_value.lower()

        if actual.lower() != expected:
            logger.error("Checksum verification FAILED for %s", entry.filename)
            logger.error("   Expected: %s", expected)
            logger.error("   Actual:   %s", actual)
            raise IntegrityError(
                "mismatch",
                expected=expected,
                actual=actual,
                target=entry.filename,
            )

        logger.info("Checksum verified (%s)", entry.algorithm.upper())
        return VerificationResult(
            verified=True,
            manifest_url=manifest_url,
            expected=expected,
            actual=actual,
        )

    def _handle_unavailable(
        self, artifact_filename: str, last_error: TransportError | None
    ) -> VerificationResult:
        if not self.lenient:
            error = IntegrityError(
                "manifest unavailable", target=artifact_filename
            )
            if last_error is not None:
                raise error from last_error
            raise error

        logger.warning(UNVERIFIED_WARNING)
        return VerificationResult(verified=False, warning=UNVERIFIED_WARNING)
