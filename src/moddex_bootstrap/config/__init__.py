"""Configuration management for moddex-bootstrap.

This package provides:
- ConfigManager: layered settings (defaults, settings.conf, env, CLI)
- BootstrapConfig: the frozen result handed to every component
- Paths: path constants and utilities
- CommentAwareConfigParser: INI parser that strips inline comments
"""

from moddex_bootstrap.config.parser import CommentAwareConfigParser
from moddex_bootstrap.config.paths import Paths
from moddex_bootstrap.config.settings import BootstrapConfig, ConfigManager

__all__ = [
    "BootstrapConfig",
    "CommentAwareConfigParser",
    "ConfigManager",
    "Paths",
]
