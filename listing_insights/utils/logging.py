"""Logging for the listing insights engine.

Every record is one line: ``<event> key=value ...``. Money and percentages are
written with two decimals and missing values as ``-`` so lines for the same
event line up when grepped.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

from ..config import LOG_LEVEL

ROOT_LOGGER = "listing_insights"


def configure_logging(namespace: str = ROOT_LOGGER) -> logging.Logger:
    logger = logging.getLogger(namespace)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    logger.addHandler(handler)
    logger.setLevel(LOG_LEVEL)
    logger.propagate = False
    return logger


def get_logger(child: Optional[str] = None) -> logging.Logger:
    base = configure_logging()
    if child:
        return base.getChild(child)
    return base


def _render(value: Any) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, float):
        return f"{value:.2f}"
    if isinstance(value, Enum):
        value = value.value
    text = str(value)
    return repr(text) if " " in text else text


def format_event(event: str, **fields: Any) -> str:
    """Render ``event`` and its fields as a single ``key=value`` line."""

    parts = [event] + [f"{key}={_render(value)}" for key, value in fields.items()]
    return " ".join(parts)


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields: Any) -> None:
    if logger.isEnabledFor(level):
        logger.log(level, format_event(event, **fields))


__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger", "format_event", "log_event"]
