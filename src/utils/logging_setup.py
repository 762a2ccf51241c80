"""Console logging setup shared by run.py and main.py."""

import logging
from typing import Optional

from utils.config import Config

_configured = False


def configure_logging(level: Optional[str] = None) -> None:
    """Install one console handler on the root logger (idempotent)."""
    global _configured

    level_name = (level or Config.LOG_LEVEL).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(Config.LOG_FORMAT))
    root.addHandler(handler)
    _configured = True
