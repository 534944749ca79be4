"""Logging setup for the storefront.

Modules log through ``get_logger(__name__)``. The root handler is installed
by ``configure_logging`` when a ``Storefront`` is created, using the level
from ``Settings.log_level``.
"""
import logging
import sys
from functools import cache

from storefront.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries underneath supabase-py that log every request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")

_CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


def configure_logging(settings: Settings) -> None:
    """Attach a stdout handler to the root logger unless one is already there."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def for_log(value: object, max_length: int = 50) -> str:
    """Render a shopper- or remote-supplied value on one bounded log line."""
    if value is None or value == "":
        return "N/A"
    text = str(value).translate(_CONTROL_CHARS)
    return text if len(text) <= max_length else text[:max_length] + "..."
