"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, document: Path = None) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session
        document: Resume document being rendered, recorded in the provenance header

    Returns:
        Path to log file

    Example:
        from vitae.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir)
        _log_info("Starting render...")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Document": document, "PDF backend": "fpdf2"},
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


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(resume_name: str, output_path: Path) -> None:
    """Log start of rendering with context."""
    _log_info(f"Starting render: {resume_name}")
    _log_debug(f"  Output: {output_path}")


def log_render_result(resume_name: str, result, elapsed_time: float) -> None:
    """
    Log rendering result.

    Args:
        resume_name: Resume display name
        result: RenderResult from render_resume()
        elapsed_time: Time taken to lay out and render
    """
    if result.success:
        _log_success(
            f"{resume_name}: {result.page_count} page(s), {result.link_count} links "
            f"({elapsed_time:.2f}s)"
        )
        _log_debug(f"  PDF: {result.pdf_path}")
    else:
        _log_error(f"Render failed: {resume_name} ({elapsed_time:.2f}s)")
        for i, err in enumerate(result.errors, 1):
            _log_error(f"  Error {i}: {err}")


def log_validation_result(pdf_path: Path, result) -> None:
    """Log validation outcome and its issues."""
    if result.is_valid:
        _log_success(f"Validation passed: {pdf_path.name} ({result.page_count} page(s))")
        return

    _log_warning(f"Validation failed: {pdf_path.name} ({len(result.issues)} issues)")
    for i, issue in enumerate(result.issues[:10], 1):
        _log_warning(f"  Issue {i}: {issue}")
    if len(result.issues) > 10:
        _log_warning(f"  ... and {len(result.issues) - 10} more issues")


def log_preview_committed(generation: int, size: int) -> None:
    """Log a preview artifact replacing the previous one."""
    _log_debug(f"Preview #{generation} committed ({size} bytes)")
