"""
Logging utilities for Kira backend.

Provides standardized logger configuration following privacy rules.

RULES:
- NEVER log raw invoice/receipt bytes or data URIs
- NEVER log API keys or Supabase keys
- NEVER log full line-item payloads or user revenue figures

Acceptable logging:
- High-level events (e.g., "Extraction completed", "Tool invoked")
- Non-sensitive metadata (e.g., item counts, tool names, scope numbers)
- Error kinds and sanitized messages
"""

import logging
from typing import Optional

from kira.config import settings


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to settings.LOG_LEVEL)

    Returns:
        Configured logger instance

    Usage:
        >>> from kira.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
