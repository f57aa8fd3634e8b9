"""Compare the installed Moddex version with the latest release."""

from dataclasses import dataclass
from typing import Literal

from moddex_bootstrap.config import BootstrapConfig
from moddex_bootstrap.constants import INSTALLED_MARKER_NAME
from moddex_bootstrap.core.github import VersionResolver, compare_versions
from moddex_bootstrap.exceptions import ConfigurationError
from moddex_bootstrap.logger import get_logger

logger = get_logger(__name__)

UpdateState = Literal["not-installed", "up-to-date", "update-available"]

# Reported for a blank version file or an installation without one
UNKNOWN_VERSION = "unknown"


@dataclass(frozen=True, slots=True)
class UpdateStatus:
    """Installed and latest versions with the resulting state."""

    installed: str | None
    latest: str
    state: UpdateState

    @property
    def needs_update(self) -> bool:
        """True when an install or update should run."""
        return self.state != "up-to-date"


class UpdateChecker:
    """Reads the installed version file and checks for a newer release."""

    def __init__(
        self, config: BootstrapConfig, resolver: VersionResolver
    ) -> None:
        """Initialize checker.

        Args:
            config: Run configuration (provides installed_version_file)
            resolver: Resolver used to discover the latest release

        """
        self.version_file = config.installed_version_file
        self.marker_file = self.version_file.parent / INSTALLED_MARKER_NAME
        self.resolver = resolver

    def installed_version(self) -> str | None:
        """Return the installed version, or None when not installed.

        Without a version file, an ``app.jar`` in the same directory still
        marks an installation whose version is unknown.

        Raises:
            ConfigurationError: If the version file exists but is unreadable

        """
        try:
            with self.version_file.open(encoding="utf-8") as f:
                first_line = f.readline().strip()
        except FileNotFoundError:
            logger.debug("No version file at %s", self.version_file)
            if self.marker_file.is_file():
                logger.debug("Found %s, version unknown", self.marker_file)
                return UNKNOWN_VERSION
            return None
        except (OSError, UnicodeDecodeError) as e:
            msg = f"cannot read installed version: {e}"
            raise ConfigurationError(msg, target=str(self.version_file)) from e
        return first_line or UNKNOWN_VERSION

    def check(self) -> UpdateStatus:
        """Compare the installed version with the latest release."""
        installed = self.installed_version()
        latest = self.resolver.resolve_latest()

        state: UpdateState
        if installed is None:
            state = "not-installed"
        elif compare_versions(installed, latest) >= 0:
            state = "up-to-date"
        else:
            state = "update-available"

        logger.debug(
            "Installed: %s, latest: %s, state: %s", installed, latest, state
        )
        return UpdateStatus(installed=installed, latest=latest, state=state)
