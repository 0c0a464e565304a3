import logging
import sys

from .constants import LOGGER_NAME

_handler: logging.Handler | None = None


def setup_logging(debug: bool = False) -> logging.Logger:
    """Send restclient diagnostics to stderr.

    The package logger discards everything until this is called.
    """
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(_handler)

    level = logging.DEBUG if debug else logging.WARNING
    logger.setLevel(level)
    _handler.setLevel(level)

    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)

    return logger
