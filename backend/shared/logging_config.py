"""
Logging setup for the Turnstile backend.

Modules log through ``logging.getLogger(__name__)``; this only decides
where records go and how they look.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s - %(message)s"

_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: str = "INFO") -> None:
    """Route all records to stdout at ``level``, replacing earlier handlers."""
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
