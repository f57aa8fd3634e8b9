"""Main logger module providing public API functions.

This module contains the core public API for the moddex-bootstrap logging
system:
- setup_logging(): Configure logging with the QueueHandler architecture
- get_logger(): Get or create a logger under the package root
- flush_all_handlers(): Ensure all pending log records are written
- clear_logger_state(): Clear global logger state for testing
"""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from moddex_bootstrap.constants import LOGGER_ROOT_NAME
from moddex_bootstrap.logger.config import load_log_settings
from moddex_bootstrap.logger.handlers import setup_root_logger
from moddex_bootstrap.logger.state import get_state


def flush_all_handlers() -> None:
    """Flush all handlers in the QueueListener to ensure writes complete.

    Waits (bounded) for the queue to drain, then flushes every handler.
    Must be called before the process is replaced or exits so that the
    final diagnostics reach the terminal.
    """
    state = get_state()
    if state.queue_listener is not None and state.log_queue is not None:
        # QueueListener doesn't use task_done(), so poll the queue
        timeout = 5.0
        start_time = time.time()
        while not state.log_queue.empty():
            if time.time() - start_time > timeout:
                break
            time.sleep(0.01)

        # Give queue listener thread time to process final records
        time.sleep(0.05)

        for handler in state.queue_listener.handlers:
            with contextlib.suppress(OSError, ValueError):
                handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener on interpreter exit."""
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        state.queue_listener.stop()
        state.queue_listener = None


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = LOGGER_ROOT_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Configure logging and return the logger for ``name``.

    The root "moddex_bootstrap" logger is initialized exactly once; child
    loggers such as "moddex_bootstrap.core.pipeline" propagate to it.

    Handler Configuration (via QueueListener):
        - Console Handler: StreamHandler on stderr, hybrid formatting
        - File Handler: RotatingFileHandler, 1MB rotation, 3 backups

    Args:
        name: Logger name, typically __name__ for module-level loggers
        console_level: Console log level ("DEBUG", "INFO", "WARNING")
        file_level: File log level ("DEBUG", "INFO")
        log_file: Path to log file
        enable_file_logging: Whether to enable file logging

    Returns:
        Logger instance (singleton per name via logging.getLogger)

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            if console_level is None or file_level is None or log_file is None:
                cfg_console, cfg_file, cfg_path = load_log_settings()
                console_level = console_level or cfg_console
                file_level = file_level or cfg_file
                log_file = log_file or cfg_path

            setup_root_logger(
                state,
                console_level,
                file_level,
                log_file,
                enable_file_logging,
            )

    return logging.getLogger(name)


def get_logger(name: str = LOGGER_ROOT_NAME) -> logging.Logger:
    """Get or create logger instance.

    This is the way to get a logger in moddex-bootstrap modules:

        >>> from moddex_bootstrap.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Resolved release %s", version)

    Args:
        name: Logger name, typically __name__

    Returns:
        Configured logger instance

    """
    return setup_logging(name=name)


def clear_logger_state() -> None:
    """Clear global logger state for testing purposes.

    Stops the QueueListener, removes handlers from package loggers and
    resets the state flags. Not for production use.
    """
    state = get_state()
    with state.lock:
        if state.queue_listener is not None:
            flush_all_handlers()
            state.queue_listener.stop()
            state.queue_listener = None

        state.log_queue = None
        state.root_initialized = False
        state.config_applied = False
        state.console_level_override = None

        for logger_name in list(logging.Logger.manager.loggerDict.keys()):
            if logger_name.startswith(LOGGER_ROOT_NAME):
                log_instance = logging.getLogger(logger_name)
                for handler in log_instance.handlers[:]:
                    handler.close()
                    log_instance.removeHandler(handler)
