"""Hand control over to the bundle's installer.

build_handoff() only describes what should run; run_handoff() runs it.
Nothing in the bootstrap pipeline happens after the installer returns.
"""

import os
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from moddex_bootstrap.exceptions import MaterializationError
from moddex_bootstrap.logger import flush_all_handlers, get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class HandoffIntent:
    """The installer invocation the caller should perform."""

    command: tuple[str, ...]
    entry_point: Path
    elevated: bool
    bundle_dir: Path

    def display(self) -> str:
        """Return the command as it would be typed in a shell."""
        return " ".join(self.command)


def _is_root() -> bool:
    return os.geteuid() == 0


def build_handoff(
    entry_point: Path,
    args: Sequence[str] = (),
    bundle_dir: Path | None = None,
) -> HandoffIntent:
    """Describe how to run the installer.

    Root runs it directly. Other users go through sudo when it is on PATH;
    without sudo the installer runs directly and enforces privileges
    itself.
    """
    command: tuple[str, ...] = (str(entry_point), *args)
    elevated = False

    if not _is_root():
        sudo = shutil.which("sudo")
        if sudo:
            command = ("sudo", *command)
            elevated = True
        else:
            logger.warning(
                "sudo not found; running installer as the current user"
            )

    return HandoffIntent(
        command=command,
        entry_point=entry_point,
        elevated=elevated,
        bundle_dir=bundle_dir or entry_point.parent,
    )


def run_handoff(intent: HandoffIntent) -> int:
    """Run the installer and return its exit code.

    Raises:
        MaterializationError: If the installer cannot be started

    """
    logger.info("Running installer: %s", intent.display())
    flush_all_handlers()
    try:
        return subprocess.call(list(intent.command), cwd=intent.bundle_dir)
    except OSError as e:
        msg = f"cannot start installer: {e}"
        raise MaterializationError(msg, target=str(intent.entry_point)) from e
