"""Logging setup for the editor2docx command-line entry point.

Library modules only create module-level loggers; handlers are installed
here, by the application that runs a conversion.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

# Libraries whose request-level chatter is only useful when tracing
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install console (and optional file) handlers on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Path to a log file receiving the same records as the console.
    trace_mode : bool, default False
        Emit timestamps and logger names, and let the HTTP client libraries
        log at the requested level.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if trace_mode:
        formatter = logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.debug("Logging to file: %s", log_file)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if trace_mode else max(level, logging.WARNING))

    return root_logger
