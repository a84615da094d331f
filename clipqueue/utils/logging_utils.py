"""
Logging utilities for the ClipQueue API.

This module provides centralized logging configuration for the FastAPI
application. It ensures consistent log formatting with request ID tracing
across all route handlers and services.
"""
import logging
import uuid
from typing import Optional

LOGGER_NAME = "clipqueue"


def setup_logger(
    log_level: int = logging.INFO,
    logger_name: str = LOGGER_NAME
) -> logging.Logger:
    """
    Configure the application logger.

    Args:
        log_level: Logging level constant from logging module.
                  Defaults to logging.INFO (20).
        logger_name: Name for the logger instance. Defaults to "clipqueue".

    Returns:
        Configured Logger instance ready for use with get_request_logger().

    Example:
        >>> logger = setup_logger(log_level=logging.DEBUG)
        >>> request_logger = get_request_logger("3f9a1c2b")
        >>> request_logger.info("Creating segment")
        2026-10-18 10:30:45 | INFO | [3f9a1c2b] Creating segment
    """
    log_format = logging.Formatter(
        '%(asctime)s | %(levelname)s | [%(request_id)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)

    # Prevent duplicate handlers if logger already configured
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(log_format)
        logger.addHandler(console_handler)

    return logger


def new_request_id() -> str:
    """Short random id used to correlate the log lines of one request."""
    return uuid.uuid4().hex[:8]


def get_request_logger(
    request_id: Optional[str] = None,
    base_logger: Optional[logging.Logger] = None
) -> logging.LoggerAdapter:
    """
    Create a logger adapter with the request ID for tracing.

    Args:
        request_id: Identifier for the request. A fresh one is generated
                    when omitted.
        base_logger: Optional base logger to wrap. If None, uses the
                    "clipqueue" logger.

    Returns:
        LoggerAdapter configured to inject request_id into all log messages.
    """
    if base_logger is None:
        base_logger = logging.getLogger(LOGGER_NAME)

    return logging.LoggerAdapter(base_logger, {"request_id": request_id or new_request_id()})


def get_system_logger() -> logging.LoggerAdapter:
    """Logger adapter for messages that do not belong to a request."""
    return get_request_logger("system")
