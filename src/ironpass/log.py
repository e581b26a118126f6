"""Logging setup for the command-line entry point.

Library modules only create named loggers; handlers are attached here, once.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(name)s: %(message)s"

_logging_initialized: bool = False


def setup_logging(verbose: bool = False) -> None:
    """Attach a stderr handler to the ``ironpass`` logger.

    This is idempotent - calling it multiple times only adjusts the level.
    """
    global _logging_initialized

    logger = logging.getLogger("ironpass")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if _logging_initialized:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    _logging_initialized = True
    logger.debug("Logging initialized")
