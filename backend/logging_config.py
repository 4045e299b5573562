"""Logging setup shared by the API and the dev server."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
HANDLER_NAME = "projection"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach one stream handler to the ``backend`` logger.

    Safe to call more than once; later calls only change the level.
    """
    logger = logging.getLogger("backend")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
