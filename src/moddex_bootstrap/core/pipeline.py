"""Release acquisition pipeline.

resolve version -> locate assets -> download artifact -> verify against
manifest -> extract -> describe handoff

All downloads and staging live in a temporary workspace that exists only
while the ``run()`` context is open. The caller performs the handoff
inside that context so an ephemeral bundle is still present while the
installer runs; the workspace is removed on success, on error and on
KeyboardInterrupt.
"""

import tempfile
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from moddex_bootstrap.config import BootstrapConfig
from moddex_bootstrap.constants import WORKSPACE_PREFIX
from moddex_bootstrap.core.bundle import BundleMaterializer
from moddex_bootstrap.core.github import AssetLocator, VersionResolver
from moddex_bootstrap.core.handoff import HandoffIntent, build_handoff
from moddex_bootstrap.core.transport import Transport, select_transport
from moddex_bootstrap.core.verification import (
    IntegrityVerifier,
    VerificationResult,
)
from moddex_bootstrap.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Everything the caller needs after a successful acquisition."""

    version: str
    artifact_url: str
    verification: VerificationResult
    bundle_dir: Path
    handoff: HandoffIntent
    ephemeral: bool


class AcquisitionPipeline:
    """Runs the acquisition stages for one bootstrap invocation."""

    def __init__(
        self,
        config: BootstrapConfig,
        transport: Transport | None = None,
        installer_args: Sequence[str] = (),
    ) -> None:
        """Initialize pipeline.

        Args:
            config: Run configuration
            transport: Transport to use (selected from config if None)
            installer_args: Arguments passed through to the installer

        Raises:
            ToolMissingError: If no transport backend is available

        """
        self.config = config
        self.transport = transport or select_transport(config)
        self.installer_args = tuple(installer_args)
        self.resolver = VersionResolver(config, self.transport)
        self.locator = AssetLocator(config)
        self.verifier = IntegrityVerifier(
            self.transport, lenient=config.lenient_verification
        )
        self.materializer = BundleMaterializer(
            replace_existing=config.replace_existing
        )

    def _workspace_parent(self) -> str | None:
        root = self.config.workspace_root
        if root is None:
            return None
        root.mkdir(parents=True, exist_ok=True)
        return str(root)

    @contextmanager
    def run(self, version: str | None = None) -> Iterator[PipelineResult]:
        """Acquire, verify and extract a release.

        Args:
            version: Tag to install; resolved from config when None

        Yields:
            PipelineResult, valid until the context exits

        Raises:
            BootstrapError: Any stage failure aborts the run

        """
        install_dir = self.config.install_dir
        if install_dir is not None:
            self.materializer.check_target(install_dir)

        version = version or self.resolver.resolve()
        assets = self.locator.locate(version)
        logger.info("Using release tag: %s", version)

        with tempfile.TemporaryDirectory(
            prefix=WORKSPACE_PREFIX, dir=self._workspace_parent()
        ) as workspace_str:
            workspace = Path(workspace_str)
            logger.debug("Workspace: %s", workspace)

            artifact_path = workspace / assets.artifact.filename
            logger.info("Downloading bundle from %s", assets.artifact.url)
            self.transport.fetch_to_file(assets.artifact.url, artifact_path)

            verification = self.verifier.verify(
                artifact_path, assets.artifact.filename, assets.manifests
            )

            bundle_dir = install_dir or workspace / "bundle"
            entry_point = self.materializer.materialize(
                artifact_path, bundle_dir, workspace
            )
            handoff = build_handoff(
                entry_point, self.installer_args, bundle_dir=bundle_dir
            )

            yield PipelineResult(
                version=version,
                artifact_url=assets.artifact.url,
                verification=verification,
                bundle_dir=bundle_dir,
                handoff=handoff,
                ephemeral=install_dir is None,
            )
            logger.debug("Removing workspace %s", workspace)
