"""Logging helpers shared by every tabledesk module."""

import logging
import os
import sys

LOG_LEVEL_ENV = "TABLEDESK_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return
    root = logging.getLogger("tabledesk")
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    root.setLevel(getattr(logging, level_name, logging.WARNING))
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``tabledesk`` hierarchy.

    The hierarchy root gets a single stderr handler the first time any
    logger is requested. Its level comes from ``TABLEDESK_LOG_LEVEL``
    (default WARNING).
    """
    _configure_root()
    return logging.getLogger(name)
