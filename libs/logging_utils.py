from __future__ import annotations

import logging
import os
from typing import Optional

_CONFIGURED = False
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d - %(message)s"


def _resolve_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = os.getenv("CALCULATOR_LOG_LEVEL") or os.getenv("LOG_LEVEL", "INFO")
    return getattr(logging, str(level).upper(), logging.INFO)


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Configure root logging once; later calls only return the root logger."""
    global _CONFIGURED
    if _CONFIGURED:
        return logging.getLogger()
    logging.basicConfig(
        level=_resolve_level(level),
        format=os.getenv("CALCULATOR_LOG_FORMAT", DEFAULT_FORMAT),
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    _CONFIGURED = True
    return logging.getLogger()


def log_exception(logger: Optional[logging.Logger], message: str, exc: BaseException) -> None:
    target_logger = logger or logging.getLogger("calculator")
    target_logger.error("%s: %s", message, exc, exc_info=True)
