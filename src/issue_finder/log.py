"""Logging configuration.

Log records go to stderr; stdout is reserved for the JSON issue list.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Configure root logging with a single stderr handler."""
    root = logging.getLogger()

    # Replace existing handlers so repeated calls do not duplicate output.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root.addHandler(handler)
    root.setLevel(level.upper())

    # GitPython and httpx are chatty at DEBUG.
    for name in ("git", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(max(root.level, logging.INFO))
