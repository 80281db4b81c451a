"""Logging configuration for the minipatch package."""

import logging
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(
    level: int = logging.WARNING,
    stream: TextIO | None = None,
) -> logging.Handler:
    """
    Attach a stream handler (stderr by default) to the ``minipatch`` logger.

    Propagation is disabled so records are not printed twice when the root
    logger is configured as well. The handler is returned so callers can
    detach it again.
    """

    logger = logging.getLogger("minipatch")
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return handler
