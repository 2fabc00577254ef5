"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_template_compiled(template_path: Path, elapsed_time: float) -> None:
    """Log a cache miss that ended in a fresh compile."""
    _log_debug(f"Compiled {template_path} ({elapsed_time * 1000:.1f}ms)")


def log_compile_failure(template_path: Path, error: Exception) -> None:
    """Log a template that failed to compile."""
    _log_error(f"Failed to compile {template_path}")
    _log_error(f"  Error: {error}")
