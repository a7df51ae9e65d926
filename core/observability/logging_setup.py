"""
Logging setup.

Configures the root logger once at startup. Modules log through
``logging.getLogger(__name__)``; level comes from ``LOG_LEVEL``.
"""
from __future__ import annotations
from typing import Optional
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Install a single stdout handler on the root logger."""
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_level = getattr(logging, name, logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(log_level)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return root_logger
