"""Process-wide logging setup for the web frontend."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    for name in ("httpx", "multipart"):
        logging.getLogger(name).setLevel(logging.WARNING)
