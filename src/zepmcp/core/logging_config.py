"""
Zep MCP Logging Configuration
=============================
Centralized logging configuration using loguru.

Provides:
  - configure_logging(): Setup function called at process startup
  - JSON log format when LOG_FORMAT=json environment variable is set

Logs always go to stderr: the stdio transport owns stdout.

Usage:
    from zepmcp.core.logging_config import configure_logging

    configure_logging(level="INFO")
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from loguru import logger

_CONFIGURED = False


def configure_logging(
    level: Optional[str] = "INFO",
    json_format: Optional[bool] = None,
) -> None:
    """
    Configure loguru logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, emit serialized JSON records. If None, check LOG_FORMAT.

    Environment:
        LOG_FORMAT: Set to "json" to enable JSON formatted logs.
        LOG_LEVEL: Used when level is None.
    """
    global _CONFIGURED

    if json_format is None:
        json_format = os.environ.get("LOG_FORMAT", "").lower() == "json"

    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO")

    logger.remove()

    if json_format:
        logger.add(sys.stderr, level=level.upper(), serialize=True, backtrace=False)
    else:
        logger.add(
            sys.stderr,
            level=level.upper(),
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level>"
            ),
            colorize=None,
            backtrace=True,
            diagnose=False,
        )

    _intercept_standard_logging(level)

    _CONFIGURED = True
    logger.debug(f"Logging configured: level={level}, json_format={json_format}")


class InterceptHandler(logging.Handler):
    """Route stdlib logging records (uvicorn, mcp, httpx) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            log_level = logger.level(record.levelname).name
        except ValueError:
            log_level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            log_level, record.getMessage()
        )


def _intercept_standard_logging(level: str) -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for logger_name in ["uvicorn", "uvicorn.error", "uvicorn.access", "mcp"]:
        std_logger = logging.getLogger(logger_name)
        std_logger.handlers = []
        std_logger.propagate = True
        std_logger.setLevel(level.upper())


def is_configured() -> bool:
    return _CONFIGURED


__all__ = ["configure_logging", "is_configured", "InterceptHandler", "logger"]
