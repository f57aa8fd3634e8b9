"""Logging formatters for console and file output.

This module provides custom formatters for the moddex-bootstrap logging
system:
- ColoredConsoleFormatter: Adds ANSI color codes to log levels
- PrefixedConsoleFormatter: Shows "[LEVEL] message" without metadata
- HybridConsoleFormatter: Plain prefix for INFO, coloured prefix for others

Diagnostics go to stderr in the "[LEVEL] message" shape so that piping the
tool's stdout (for example the --check report) stays clean.
"""

import logging

from moddex_bootstrap.constants import LOG_COLORS


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter with ANSI color support for different log levels.

    Colors are applied to a temporary copy of the level name during
    format() and then reverted, so the shared record is never mutated for
    other handlers.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors for console output.

        Args:
            record: The log record to format

        Returns:
            Formatted log message with ANSI color codes for the level name

        """
        if record.levelname in LOG_COLORS:
            color = LOG_COLORS[record.levelname]
            reset = LOG_COLORS["RESET"]
            colored_level = f"{color}{record.levelname}{reset}"

            original_levelname = record.levelname
            record.levelname = colored_level
            try:
                return super().format(record)
            finally:
                record.levelname = original_levelname

        return super().format(record)


class PrefixedConsoleFormatter(logging.Formatter):
    """Minimal console formatter: level prefix and message only."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as "[LEVEL] message".

        Args:
            record: The log record to format

        Returns:
            The prefixed message, with traceback text when present

        """
        message = f"[{record.levelname}] {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


class HybridConsoleFormatter(logging.Formatter):
    """Console formatter with plain INFO lines and coloured diagnostics.

    Format Selection:
        - INFO: "[INFO] message"
        - DEBUG/WARNING/ERROR/CRITICAL: the structured format, with the
          level name coloured when colour is enabled

    Example Output:
        INFO:     "[INFO] Downloading moddex-v1.2.3-linux-amd64.tar.gz"
        ERROR:    "[ERROR] Integrity check failed: mismatch"

    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        use_color: bool = True,  # noqa: FBT001, FBT002
    ) -> None:
        """Initialize hybrid formatter.

        Args:
            fmt: Format string for non-INFO messages
            datefmt: Date format string for timestamps
            use_color: Whether to colour level names

        """
        super().__init__(fmt, datefmt)
        self._simple_formatter = PrefixedConsoleFormatter()
        self._structured_formatter: logging.Formatter
        if use_color:
            self._structured_formatter = ColoredConsoleFormatter(fmt, datefmt)
        else:
            self._structured_formatter = logging.Formatter(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record using simple or structured format by level.

        Args:
            record: The log record to format

        Returns:
            Formatted message

        """
        if record.levelno == logging.INFO:
            return self._simple_formatter.format(record)
        return self._structured_formatter.format(record)
