"""Logging setup. Modules only ever call logging.getLogger(__name__); this configures the root once."""

import logging

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
