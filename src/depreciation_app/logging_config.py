from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
HANDLER_NAME = "depreciation_app.console"


def setup_logging(level: int | str = logging.INFO) -> None:
    """Send application logs to stdout. Safe to call more than once."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("depreciation_app")
    logger.setLevel(level)
    if not any(handler.get_name() == HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)
