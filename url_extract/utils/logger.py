import logging
import sys
from contextlib import contextmanager

from url_extract.config import get_log_level


def setup_logger(name="url_extract", level=None):
    logger = logging.getLogger(name)
    if level is None:
        level = getattr(logging, get_log_level(), logging.INFO)
    logger.setLevel(level)

    # Avoid duplicate handlers if called multiple times
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


@contextmanager
def redirect_logs(stream, name="url_extract"):
    """Temporarily point the logger's stream handlers at another stream."""
    logger = logging.getLogger(name)
    handlers = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
    previous = [h.stream for h in handlers]
    for handler in handlers:
        handler.setStream(stream)
    try:
        yield logger
    finally:
        for handler, old_stream in zip(handlers, previous):
            handler.setStream(old_stream)
