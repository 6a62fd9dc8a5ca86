"""Centralized logging configuration for speclint using Loguru.

Provides consistent logging across the linter with support for:
- Multiple output formats (console, JSON, structured, rich)
- Environment-based configuration
- Idempotent configuration

Logs always go to stderr so that the rendered lint report on stdout stays
clean for piping.

Examples
--------
Basic usage:

>>> from speclint.core.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Linting {count} specs", count=3)

Configure logging globally::

    from speclint.core.logging import configure_logging
    configure_logging(level="DEBUG", format="rich")
"""

import logging
import os
import sys
from contextlib import suppress
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    import types

    from loguru import Logger

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

_CURRENT_CONFIG: dict | None = None
_HANDLER_IDS: list[int] = []


def _stderr(message: str) -> None:
    # Looked up on every write so redirected streams (CLI runners) are honoured
    sys.stderr.write(message)


def configure_logging(
    level: LogLevel = "WARNING",
    format: LogFormat = "structured",
    output_file: str | Path | None = None,
    use_color: bool = True,
    include_timestamp: bool = True,
    force_reconfigure: bool = False,
    enable_stdlib_bridge: bool = False,
) -> None:
    """Configure global logging for speclint.

    This function is idempotent - calling it multiple times with the same
    configuration will not duplicate handlers or change settings.

    Parameters
    ----------
    level : LogLevel, default="WARNING"
        Minimum log level to output
    format : LogFormat, default="structured"
        Output format:
        - "console": Simple console output (no colors, basic format)
        - "json": JSON format for log aggregation
        - "structured": Enhanced structured format with colors (Loguru native)
        - "rich": Rich console handler on stderr
    output_file : str | Path | None, default=None
        Optional file path to write JSON logs to (in addition to stderr)
    use_color : bool, default=True
        Use ANSI color codes in structured format (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output
    force_reconfigure : bool, default=False
        Force reconfiguration even if already configured with same settings
    enable_stdlib_bridge : bool, default=False
        Enable interception of stdlib logging for third-party libraries
    """
    global _CURRENT_CONFIG

    current_config = {
        "level": level,
        "format": format,
        "output_file": str(output_file) if output_file else None,
        "use_color": use_color,
        "include_timestamp": include_timestamp,
        "enable_stdlib_bridge": enable_stdlib_bridge,
    }

    if not force_reconfigure and current_config == _CURRENT_CONFIG:
        return

    # Remove only our previously added handlers (not external ones)
    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()

    # Loguru installs a default stderr sink at import time
    if _CURRENT_CONFIG is None:
        with suppress(ValueError):
            logger.remove(0)

    if format == "rich":
        rich_handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            markup=False,
            show_time=include_timestamp,
            show_level=True,
            show_path=False,
        )
        handler_id = logger.add(sink=rich_handler, level=level, format="{message}")
        _HANDLER_IDS.append(handler_id)

    elif format == "json":
        handler_id = logger.add(sink=_stderr, level=level, serialize=True)
        _HANDLER_IDS.append(handler_id)

    elif format == "structured":
        timestamp_fmt = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> " if include_timestamp else ""
        colorize = use_color and sys.stderr.isatty()
        color_level = "<level>{level: <8}</level>" if colorize else "{level: <8}"
        structured_format = (
            f"{timestamp_fmt}[{color_level}]"
            "<cyan>{name}:{function}:{line}</cyan> | <level>{message}</level>"
        )
        handler_id = logger.add(
            sink=_stderr,
            level=level,
            format=structured_format,
            colorize=colorize,
        )
        _HANDLER_IDS.append(handler_id)

    else:  # console
        timestamp_fmt = "{time:YYYY-MM-DD HH:mm:ss} " if include_timestamp else ""
        console_format = f"{timestamp_fmt}{{level: <8}} | {{name}} | {{message}}"
        handler_id = logger.add(
            sink=_stderr,
            level=level,
            format=console_format,
            colorize=False,
        )
        _HANDLER_IDS.append(handler_id)

    if output_file:
        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        # File output always uses JSON for easier parsing
        handler_id = logger.add(
            sink=output_path,
            level=level,
            serialize=True,
            rotation="10 MB",
            retention="1 week",
        )
        _HANDLER_IDS.append(handler_id)

    if enable_stdlib_bridge:
        enable_stdlib_logging_bridge()

    _CURRENT_CONFIG = current_config


@lru_cache(maxsize=256)
def get_logger(name: str) -> "Logger":
    """Get a logger instance with the given name (cached for performance).

    Parameters
    ----------
    name : str
        Logger name, typically __name__ from the calling module

    Returns
    -------
    loguru.Logger
        Configured logger instance bound with the module name

    Notes
    -----
    If configure_logging() hasn't been called, initializes with defaults
    taken from ``SPECLINT_LOG_LEVEL`` and ``SPECLINT_LOG_FORMAT``.
    """
    _ensure_configured()
    return logger.bind(module=name)


def enable_stdlib_logging_bridge() -> None:
    """Redirect stdlib ``logging`` records into Loguru."""

    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            level: str | int
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Find caller from where originated the logged message
            frame: types.FrameType | None = sys._getframe(6)
            depth = 6
            while frame and frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def _ensure_configured() -> None:
    """Ensure logging has at least basic configuration (lazy initialization)."""
    if _CURRENT_CONFIG is None:
        level = os.getenv("SPECLINT_LOG_LEVEL", "WARNING").upper()
        format_type = os.getenv("SPECLINT_LOG_FORMAT", "structured").lower()
        configure_logging(level=level, format=format_type)  # type: ignore
