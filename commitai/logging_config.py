"""Logging setup for the commit-ai command line."""

import logging
import sys

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send ``commitai`` log records to stderr.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    logger = logging.getLogger("commitai")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Repeated calls (e.g. from tests) replace the handler rather than stack it
    for handler in list(logger.handlers):
        if getattr(handler, "_commitai", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._commitai = True
    logger.addHandler(handler)
    logger.propagate = False
