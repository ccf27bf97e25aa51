#!/usr/bin/env python3
"""
Logging setup for the fscontent CLI. Library modules only create
module-level loggers; handlers are installed here, once, by the entry point.
"""

import logging
from typing import Any, Dict

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def configure_logging(config: Dict[str, Any]) -> int:
    """
    Configure the root logger from `config["logging"]["level"]`.

    Unknown level names fall back to INFO. Returns the numeric level applied.
    """
    name = str((config.get("logging") or {}).get("level", "INFO")).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, force=True)
    return level
