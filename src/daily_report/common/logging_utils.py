from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def setup_logging(level: Optional[str] = None, *, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger once.

    Console output always; a rotating file when ``log_file`` is given.
    Calling again only adjusts the level.
    """
    logger = logging.getLogger("daily_report")
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logger.setLevel(log_level)

    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(path, maxBytes=10485760, backupCount=5)  # 10MB
        file_handler.setFormatter(logging.Formatter(_DETAILED_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
