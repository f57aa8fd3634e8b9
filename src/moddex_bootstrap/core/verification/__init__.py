"""Artifact integrity verification."""

from moddex_bootstrap.core.verification.results import VerificationResult
from moddex_bootstrap.core.verification.verifier import (
    IntegrityVerifier,
    compute_hash,
)

__all__ = ["IntegrityVerifier", "VerificationResult", "compute_hash"]
