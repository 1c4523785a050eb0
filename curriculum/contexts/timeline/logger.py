"""
Timeline context logger.

Provides logging interface for timeline context with automatic [timeline] prefix.
All timeline modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[timeline]"


def _log_warning(message: str) -> None:
    """Log warning message with [timeline] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [timeline] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
