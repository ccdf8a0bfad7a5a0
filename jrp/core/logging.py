"""Logging setup for the provider process."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
HANDLER_NAME = "jrp"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the ``jrp`` logger tree."""
    root = logging.getLogger("jrp")
    root.setLevel(level.upper())
    if any(h.get_name() == HANDLER_NAME for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
