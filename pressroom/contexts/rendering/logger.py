"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from pressroom.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, templates_path: Path, verbose: bool = False) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this build session
        templates_path: Templates root, recorded in the provenance header
        verbose: Show DEBUG records on the console too

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Templates": templates_path},
        console_level="DEBUG" if verbose else "INFO",
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_build_start(content_path: Path, output_path: Path, num_paths: int) -> None:
    """Log start of a build pass with context."""
    _log_info(f"Building {content_path} -> {output_path}")
    _log_debug(f"  Entries: {num_paths}")


def log_document_failure(relative_path: str, error: Exception) -> None:
    """Log one failed document with its phase and cause."""
    phase = getattr(error, "phase", None) or "unknown"
    _log_error(f"{relative_path}: failed during {phase}")
    for line in str(error).splitlines():
        if line.strip():
            _log_error(f"  {line}")


def log_build_result(result) -> None:
    """
    Log build result with per-document failures.

    Args:
        result: BuildResult from SiteBuilder.build()
    """
    if result.success:
        _log_success(
            f"Build succeeded: {len(result.written)} pages ({result.elapsed:.2f}s)"
        )
    else:
        _log_error(
            f"Build finished with {len(result.failures)} failed documents, "
            f"{len(result.written)} pages written ({result.elapsed:.2f}s)"
        )
        for failure in result.failures:
            _log_error(f"  {failure.path} [{failure.phase}]")
