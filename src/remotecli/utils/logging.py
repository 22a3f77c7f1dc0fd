"""Logging setup utilities for remotecli.

Configures the 'remotecli' logger tree from the logging section of the
settings. Gateway audit records go to 'remotecli.audit'; they reach the
regular handlers and, when ``audit_file`` is set, a separate audit file.
"""

from __future__ import annotations

import logging
import sys

from remotecli.config.settings import LoggingConfig
from remotecli.gateway.endpoint import AUDIT_LOGGER_NAME


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure logging for the remotecli application.

    Sets up the root 'remotecli' logger with the specified level, format,
    and optional file handler, plus an optional audit file for command
    requests. Calling it again replaces the handlers installed by the
    previous call.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output, no audit file).
    """
    if config is None:
        config = LoggingConfig()

    root_logger = logging.getLogger("remotecli")
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    _reset_handlers(root_logger)

    formatter = logging.Formatter(config.format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if config.file:
        file_handler = logging.FileHandler(config.file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Audit records are kept even when the application level is WARNING
    audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)
    audit_logger.setLevel(logging.INFO)
    _reset_handlers(audit_logger)
    if config.audit_file:
        audit_handler = logging.FileHandler(config.audit_file)
        audit_handler.setFormatter(logging.Formatter(config.audit_format))
        audit_logger.addHandler(audit_handler)

    root_logger.info("Logging initialized at %s level", config.level)
