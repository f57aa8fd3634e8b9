"""Verification result types for artifact integrity checking."""

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class VerificationResult:
    """Outcome of verifying a downloaded artifact.

    Attributes:
        verified: True when the digest matched a manifest entry
        manifest_url: Manifest the entry was taken from, if any
        expected: Digest listed in the manifest
        actual: Digest computed from the artifact
        warning: Set when the artifact was accepted without verification

    """

    verified: bool
    manifest_url: str | None = None
    expected: str | None = None
    actual: str | None = None
    warning: str | None = None
