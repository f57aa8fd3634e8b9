"""Release acquisition core: resolve, download, verify, extract, hand off."""

from moddex_bootstrap.core.bundle import BundleMaterializer, find_entry_point
from moddex_bootstrap.core.handoff import (
    HandoffIntent,
    build_handoff,
    run_handoff,
)
from moddex_bootstrap.core.pipeline import AcquisitionPipeline, PipelineResult
from moddex_bootstrap.core.update import UpdateChecker, UpdateStatus

__all__ = [
    "AcquisitionPipeline",
    "BundleMaterializer",
    "HandoffIntent",
    "PipelineResult",
    "UpdateChecker",
    "UpdateStatus",
    "build_handoff",
    "find_entry_point",
    "run_handoff",
]
