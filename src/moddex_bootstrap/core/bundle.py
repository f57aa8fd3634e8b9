"""Extract a verified release archive and locate the installer.

Extraction always goes to a staging directory inside the workspace first;
the staged tree is moved into the target only after the installer entry
point has been found in it. An existing target is never merged into:
it is either rejected or deleted and recreated.
"""

import shutil
import stat
import tarfile
import zlib
from pathlib import Path

from moddex_bootstrap.constants import (
    ENTRY_POINT_MAX_DEPTH,
    ENTRY_POINT_RELATIVE_PATH,
)
from moddex_bootstrap.exceptions import MaterializationError
from moddex_bootstrap.logger import get_logger

logger = get_logger(__name__)

_ENTRY_POINT_PARTS = Path(ENTRY_POINT_RELATIVE_PATH).parts


def find_entry_point(
    root: Path, max_depth: int = ENTRY_POINT_MAX_DEPTH
) -> Path | None:
    """Locate ``scripts/install.sh`` under ``root``.

    The fixed path ``root/scripts/install.sh`` wins. Otherwise the tree is
    searched breadth-first down to ``max_depth`` levels for a file whose
    path ends in ``scripts/install.sh``; the shallowest match wins, ties
    broken by path order. Symlinked directories are not followed.

    Returns:
        Path of the entry point, or None if there is none within bounds

    """
    fixed = root / ENTRY_POINT_RELATIVE_PATH
    if fixed.is_file():
        return fixed

    level = [root]
    for _depth in range(max_depth):
        matches: list[Path] = []
        next_level: list[Path] = []
        for directory in level:
            for child in directory.iterdir():
                if child.is_dir() and not child.is_symlink():
                    next_level.append(child)
                elif (
                    child.is_file()
                    and child.parent != root
                    and child.parts[-2:] == _ENTRY_POINT_PARTS
                ):
                    matches.append(child)
        if matches:
            return min(matches, key=lambda p: p.relative_to(root).as_posix())
        level = next_level
    return None


def make_executable(path: Path) -> None:
    """Add execute permission for user, group and others."""
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def extract_archive(archive_path: Path, destination: Path) -> None:
    """Extract a tar archive (any compression tarfile understands).

    The "data" filter rejects absolute paths, ``..`` traversal, links
    pointing outside the destination and device files.

    Raises:
        MaterializationError: If the archive is corrupt or unsafe

    """
    destination.mkdir(parents=True, exist_ok=True)
    try:
        with tarfile.open(archive_path, "r:*") as archive:
            archive.extractall(destination, filter="data")
    except (tarfile.TarError, OSError, EOFError, zlib.error) as e:
        msg = f"cannot extract archive: {e}"
        raise MaterializationError(msg, target=archive_path.name) from e


class BundleMaterializer:
    """Turns a verified archive into a bundle directory."""

    def __init__(
        self,
        replace_existing: bool = False,  # noqa: FBT001, FBT002
    ) -> None:
        """Initialize materializer.

        Args:
            replace_existing: Delete and recreate a non-empty target
                instead of failing

        """
        self.replace_existing = replace_existing

    def check_target(self, target_dir: Path) -> None:
        """Fail early if ``target_dir`` cannot receive the bundle.

        Raises:
            MaterializationError: If the target is a file, or a non-empty
                directory while replacing is not allowed

        """
        if not target_dir.exists():
            return
        if not target_dir.is_dir():
            msg = "exists and is not a directory"
            raise MaterializationError(msg, target=str(target_dir))
        if any(target_dir.iterdir()) and not self.replace_existing:
            msg = "directory exists and is not empty (use --replace)"
            raise MaterializationError(msg, target=str(target_dir))

    def materialize(
        self, artifact_path: Path, target_dir: Path, staging_root: Path
    ) -> Path:
        """Extract ``artifact_path`` into ``target_dir``.

        Args:
            artifact_path: Verified archive
            target_dir: Final bundle directory
            staging_root: Workspace directory used for staging

        Returns:
            Path of the executable installer entry point

        Raises:
            MaterializationError: On a corrupt archive, a missing entry
                point or a target that cannot be replaced

        """
        self.check_target(target_dir)

        staging = staging_root / "staging"
        if staging.exists():
            shutil.rmtree(staging)
        logger.info("Extracting %s", artifact_path.name)
        extract_archive(artifact_path, staging)

        staged_entry = find_entry_point(staging)
        if staged_entry is None:
            msg = (
                f"installer {ENTRY_POINT_RELATIVE_PATH} not found within "
                f"{ENTRY_POINT_MAX_DEPTH} levels of the bundle"
            )
            raise MaterializationError(msg, target=artifact_path.name)

        self._install_tree(staging, target_dir)

        entry_point = target_dir / staged_entry.relative_to(staging)
        make_executable(entry_point)
        logger.info("Resolved installer at %s", entry_point)
        return entry_point

    def _install_tree(self, staging: Path, target_dir: Path) -> None:
        if target_dir.exists():
            if any(target_dir.iterdir()):
                logger.info("Replacing existing directory %s", target_dir)
            try:
                shutil.rmtree(target_dir)
            except OSError as e:
                msg = f"cannot remove existing directory: {e}"
                raise MaterializationError(msg, target=str(target_dir)) from e

        target_dir.parent.mkdir(parents=True, exist_ok=True)
        try:
            shutil.move(staging, target_dir)
        except OSError as e:
            msg = f"cannot move bundle into place: {e}"
            raise MaterializationError(msg, target=str(target_dir)) from e
        logger.debug("Bundle installed at %s", target_dir)
