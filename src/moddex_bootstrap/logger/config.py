"""Configuration loading and updating for logging system.

This module provides the bootstrap log settings used before the
configuration layer has run, and a function to apply configured levels to
the already running handlers afterwards.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from moddex_bootstrap.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    LOG_DIR_ENV,
    LOG_DIR_NAME,
    LOG_FILE_NAME,
)

if TYPE_CHECKING:
    from moddex_bootstrap.logger.state import _LoggerState


def load_log_settings() -> tuple[str, str, Path]:
    """Load default console level, file level, and file path.

    Environment Variable Override:
        MODDEX_BOOTSTRAP_LOG_DIR: Overrides the log directory path. Used by
        the test suite to keep test logs out of the user's home directory.

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    env_log_dir = os.getenv(LOG_DIR_ENV)
    if env_log_dir:
        log_path = Path(env_log_dir).expanduser() / LOG_FILE_NAME
    else:
        log_path = (
            Path.home()
            / DEFAULT_CONFIG_SUBDIR
            / CONFIG_DIR_NAME
            / LOG_DIR_NAME
            / LOG_FILE_NAME
        )

    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_path


def _is_console_handler(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and not isinstance(
        handler, RotatingFileHandler
    )


def update_logger_from_config(
    state: "_LoggerState", console_level: str, file_level: str
) -> None:
    """Update logger handler levels from resolved configuration.

    Only updates handler levels, never adds or removes handlers.

    Args:
        state: Logger state object (from logger.state module)
        console_level: Console level name from configuration
        file_level: File level name from configuration

    """
    console = getattr(logging, console_level.upper(), logging.INFO)
    file = getattr(logging, file_level.upper(), logging.INFO)

    if state.queue_listener is not None:
        for handler in state.queue_listener.handlers:
            if _is_console_handler(handler):
                handler.setLevel(console)
            elif isinstance(handler, RotatingFileHandler):
                handler.setLevel(file)

    state.config_applied = True


def set_console_level_temporarily(state: "_LoggerState", level: str) -> None:
    """Lower or raise the console level until restore_console_level()."""
    if state.queue_listener is None:
        return
    for handler in state.queue_listener.handlers:
        if _is_console_handler(handler):
            if state.console_level_override is None:
                state.console_level_override = handler.level
            handler.setLevel(getattr(logging, level.upper(), logging.DEBUG))


def restore_console_level(state: "_LoggerState") -> None:
    """Restore the console level saved by set_console_level_temporarily()."""
    if state.queue_listener is None or state.console_level_override is None:
        return
    for handler in state.queue_listener.handlers:
        if _is_console_handler(handler):
            handler.setLevel(state.console_level_override)
    state.console_level_override = None
