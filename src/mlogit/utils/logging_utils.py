"""
Logging utilities for mlogit.

Every module logs through a child of the ``mlogit`` package logger. The
package stays silent until `configure_logging` is called (the CLI does
this), so applications embedding mlogit keep control of their handlers.
"""

import logging
from typing import Optional

PACKAGE_LOGGER = "mlogit"
LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or a named logger (usually ``__name__``)."""
    return logging.getLogger(name if name is not None else PACKAGE_LOGGER)


def configure_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Attach a stream handler to the package logger and set its level.

    Calling it again only changes the level; the handler is added once.

    Parameters
    ----------
    verbose : bool
        Log DEBUG records, including the engine arguments of each call.
    quiet : bool
        Log warnings and errors only. Ignored when ``verbose`` is set.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    handler = next(
        (h for h in logger.handlers if getattr(h, "name", None) == PACKAGE_LOGGER),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(PACKAGE_LOGGER)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    handler.setLevel(level)

    return logger
