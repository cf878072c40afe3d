"""Logging configuration for the Flask app and its services."""

from __future__ import annotations

import logging
from typing import Union


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    # The transport logs every request at INFO; keep it quiet unless debugging
    logging.getLogger("elastic_transport").setLevel(max(level, logging.WARNING))
