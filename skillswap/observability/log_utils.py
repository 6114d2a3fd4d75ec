"""
Logging utilities for safe structured logging.

Dependencies: logging (stdlib), skillswap.core.exceptions
System role: Logging helper functions
"""

import logging
from typing import Any

from skillswap.core.exceptions import SkillSwapException


def safe_log_value(value: Any, max_length: int = 500) -> Any:
    """
    Make a value safe to pass through logging ``extra``.

    Numbers and booleans pass through; containers are summarized and long
    strings truncated.

    Args:
        value: Value to convert
        max_length: Maximum string length before truncating

    Returns:
        A scalar suitable for structured logging
    """
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (list, tuple, set)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"

    val_str = str(value)
    if len(val_str) > max_length:
        return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
    return val_str


def log_domain_error(
    logger: logging.Logger,
    message: str,
    exc: SkillSwapException,
    **context,
) -> None:
    """
    Log a rejected operation at WARNING with the exception's details.

    Args:
        logger: Logger instance
        message: Log message
        exc: Domain exception
        **context: Additional context
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context.update(
        {f"detail_{key}": safe_log_value(val) for key, val in exc.details.items()}
    )
    safe_context.update({"error_type": type(exc).__name__, "error_msg": exc.message})
    logger.warning(message, extra=safe_context)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an unexpected exception with traceback and context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context.update({
        "error_type": type(exc).__name__,
        "error_msg": str(exc),
    })
    logger.exception(message, extra=safe_context)
