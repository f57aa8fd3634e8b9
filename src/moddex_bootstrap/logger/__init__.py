"""Logging utilities for moddex-bootstrap.

This package provides structured logging with:
- "[LEVEL] message" console diagnostics on stderr (coloured on a TTY)
- File rotation using standard RotatingFileHandler
- QueueHandler/QueueListener so handler I/O happens off the caller's thread
- Hierarchical logger naming (e.g., moddex_bootstrap.core.pipeline)

Usage:
    >>> from moddex_bootstrap.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Downloading %s", url)  # Use %-style formatting

Environment Variables:
    MODDEX_BOOTSTRAP_LOG_DIR: Override the log file directory.

Rules:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Handlers are only attached to the root 'moddex_bootstrap' logger
    4. Never use f-strings in log calls
"""

from moddex_bootstrap.logger.config import (
    restore_console_level as _restore_console_level,
)
from moddex_bootstrap.logger.config import (
    set_console_level_temporarily as _set_console_level,
)
from moddex_bootstrap.logger.config import (
    update_logger_from_config as _update_config,
)
from moddex_bootstrap.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
    PrefixedConsoleFormatter,
)
from moddex_bootstrap.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from moddex_bootstrap.logger.state import get_state

__all__ = [
    "ColoredConsoleFormatter",
    "HybridConsoleFormatter",
    "PrefixedConsoleFormatter",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "restore_console_level",
    "set_console_level_temporarily",
    "setup_logging",
    "update_logger_from_config",
]


def update_logger_from_config(console_level: str, file_level: str) -> None:
    """Apply configured log levels to the running handlers."""
    _update_config(get_state(), console_level, file_level)


def set_console_level_temporarily(level: str) -> None:
    """Change the console level, e.g. to DEBUG for --verbose."""
    _set_console_level(get_state(), level)


def restore_console_level() -> None:
    """Undo set_console_level_temporarily()."""
    _restore_console_level(get_state())
