"""
Logging setup shared by the CLI and the HTTP service.
"""

import logging
import sys
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

from .settings import settings


def setup_logging(
    level: Union[int, str, None] = None,
    json_format: Optional[bool] = None,
    stream=None,
) -> None:
    """Configure the root logger. Arguments left as None come from settings."""
    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    if json_format is None:
        json_format = settings.LOG_JSON

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    if json_format:
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            timestamp=True,
        )
    else:
        formatter = logging.Formatter(settings.LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logging.getLogger("charset_normalizer").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
