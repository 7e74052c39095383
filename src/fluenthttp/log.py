# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for fluenthttp.

Modules log through ``logging.getLogger(__name__)`` under the ``fluenthttp``
namespace. The package logger carries a NullHandler so an application that
never configures logging sees no output; ``setup_logging`` opts in.
"""

from __future__ import annotations

import logging
import os

LOGGER_NAME = "fluenthttp"
DEFAULT_LOG_LEVEL = os.getenv("FLUENTHTTP_LOG_LEVEL", "WARNING").upper()

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

_installed_handler: logging.Handler | None = None


def setup_logging(level: str | None = None, handler: logging.Handler | None = None) -> logging.Logger:
    """
    Send fluenthttp log records to ``handler`` (stderr by default).

    Only the package logger is touched; root logging configuration is left to
    the application. Calling it again replaces the handler installed earlier.
    """
    global _installed_handler
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, effective_level, logging.WARNING))

    if _installed_handler is not None:
        logger.removeHandler(_installed_handler)
    _installed_handler = handler or logging.StreamHandler()
    _installed_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(_installed_handler)
    return logger


__all__ = ["LOGGER_NAME", "setup_logging"]
