"""Handler setup for the package's stdlib loggers.

Attaches a console handler and, when a log directory is configured,
separate files for:
- info.log: General logs (INFO level and above)
- error.log: Error logs only (ERROR level and above)
"""

import logging
import sys
from pathlib import Path

# Handlers installed by setup_logging, so repeated calls replace only our own.
_installed_handlers: list[logging.Handler] = []


def setup_logging(level: int = logging.INFO, log_dir: Path | None = None) -> logging.Logger:
    """Configure the package logger with console and optional file handlers.

    structlog renders the final message, so handlers only pass it through.

    Args:
        level: Minimum level for the package logger and console output.
        log_dir: Directory for info.log and error.log. Files are skipped if None.

    Returns:
        The configured "docfill" logger.
    """
    package_logger = logging.getLogger("docfill")
    package_logger.setLevel(level)

    for handler in _installed_handlers:
        package_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    passthrough = logging.Formatter(fmt="%(message)s")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(passthrough)
    _installed_handlers.append(console_handler)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        # File handler for INFO and above (info.log)
        info_handler = logging.FileHandler(log_dir / "info.log", encoding="utf-8")
        info_handler.setLevel(logging.INFO)
        info_handler.setFormatter(passthrough)
        _installed_handlers.append(info_handler)

        # File handler for ERROR and above (error.log)
        error_handler = logging.FileHandler(log_dir / "error.log", encoding="utf-8")
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(passthrough)
        _installed_handlers.append(error_handler)

    for handler in _installed_handlers:
        package_logger.addHandler(handler)

    return package_logger

