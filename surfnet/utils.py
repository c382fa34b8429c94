"""Logging setup for the surfnet package."""

import logging

import surfnet


def configure_logging(level=logging.INFO, logfile=None):
    """Configure the ``surfnet`` package logger.

    Called once when :mod:`surfnet` is imported.  Calling it again replaces
    the handlers it installed earlier instead of stacking duplicates.

    Parameters
    ----------
    level : int, default logging.INFO
        Logging level, e.g. ``logging.DEBUG`` to see per-call mesh summaries.
    logfile : str, optional
        Also write log records to this file.

    Examples
    --------
    >>> import logging
    >>> from surfnet.utils import configure_logging
    >>> configure_logging(level=logging.DEBUG, logfile="surfnet.log")
    """
    logger = logging.getLogger(surfnet.__name__)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_surfnet_handler", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter("%(asctime)s %(message)s", datefmt="%H:%M:%S")

    logger_handler = logging.StreamHandler()
    logger_handler.setFormatter(formatter)
    logger_handler._surfnet_handler = True
    logger.addHandler(logger_handler)

    if logfile is not None:
        file_logger_handler = logging.FileHandler(logfile)
        file_logger_handler.setFormatter(formatter)
        file_logger_handler._surfnet_handler = True
        logger.addHandler(file_logger_handler)
