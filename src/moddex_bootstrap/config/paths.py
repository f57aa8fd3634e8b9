"""Path constants and utilities for moddex-bootstrap configuration."""

import os
from pathlib import Path

from moddex_bootstrap.constants import (
    CONFIG_DIR_ENV,
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_SUBDIR,
)


class Paths:
    """Application paths and directory structure."""

    HOME_DIR = Path.home()
    CONFIG_BASE_DIR = HOME_DIR / DEFAULT_CONFIG_SUBDIR
    CONFIG_DIR = CONFIG_BASE_DIR / CONFIG_DIR_NAME

    @classmethod
    def config_dir(cls) -> Path:
        """Return the configuration directory, honouring the env override.

        Returns:
            $MODDEX_BOOTSTRAP_CONFIG_DIR when set, else CONFIG_DIR

        """
        override = os.getenv(CONFIG_DIR_ENV)
        if override:
            return cls.expand_path(override)
        return cls.CONFIG_DIR

    @classmethod
    def settings_file(cls, config_dir: Path | None = None) -> Path:
        """Return the path of settings.conf inside ``config_dir``."""
        return (config_dir or cls.config_dir()) / CONFIG_FILE_NAME

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand and resolve path with ~ and relative path support.

        Args:
            path_str: Path string to expand (e.g., "~/moddex" or "./bundle")

        Returns:
            Expanded and resolved Path object

        Example:
            >>> Paths.expand_path("~/moddex")
            Path('/home/user/moddex')
        """
        return Path(path_str).expanduser().resolve(strict=False)
