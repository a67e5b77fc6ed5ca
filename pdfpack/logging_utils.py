"""Structured logging helpers for the assembly pipeline."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict

LOGGER_NAME = "pdfpack"


def configure_logger(level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger


def log_event(event: str, **payload: Any) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    data: Dict[str, Any] = {"event": event, **payload}
    logger.info(json.dumps(data, ensure_ascii=False, default=str))
